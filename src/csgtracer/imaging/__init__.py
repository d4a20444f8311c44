# imaging/__init__.py
