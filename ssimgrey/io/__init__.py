# ssimgrey/io/__init__.py
