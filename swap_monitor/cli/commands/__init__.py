# swap_monitor/cli/commands/__init__.py
