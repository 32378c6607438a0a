"""MacReader - Core Application Package

This package contains the core application modules including:
- CLI interface (main.py)
- Search controller and UI delivery queue (controller.py)
- Data models (book.py)
- Database layer (database.py)
- Terminal rendering (ui_helpers.py)
"""
