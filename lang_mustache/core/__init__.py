# lang_mustache/core/__init__.py
"""
Core engine: path resolution, value coercion, the template compiler and
renderer, and the script-engine facade.
"""
