"""
Generators — produce project files from october.yaml.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile``.
"""
