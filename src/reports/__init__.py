"""Alert Reports: filter an alert tree and render it through a template.

Modules
───────
  errors      — typed failures surfaced to callers
  pattern     — expand [[site]] and {{date}} placeholders in file names
  tree_filter — subset the alert tree by context/site/confidence/risk
  helper      — formatting utilities exposed to templates
  engine      — Jinja2 template engine and WeasyPrint PDF converter
  renderer    — bind, render, bundle resources, convert, display
  registry    — discover template descriptors in a directory
  settings    — defaults from config/reports.yaml
  pipeline    — generate_report(): pattern -> filter -> render
  cli         — argparse entry-point
"""
