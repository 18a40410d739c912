"""Flask UI and JSON API over completion.Engine (run with `python -m frontend`)."""
