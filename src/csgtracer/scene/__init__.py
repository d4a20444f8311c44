# scene/__init__.py
