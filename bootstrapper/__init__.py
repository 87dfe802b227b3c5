"""
October Bootstrapper — provision an October CMS instance from october.yaml.
"""

__version__ = "0.1.0"
