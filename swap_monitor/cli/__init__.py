# swap_monitor/cli/__init__.py
