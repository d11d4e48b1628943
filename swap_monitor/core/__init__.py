# swap_monitor/core/__init__.py
