"""Settings package for the drone marketplace project.

``base.py`` holds the configuration shared by every environment. ``dev.py``
and ``test.py`` extend it with environment specific overrides.
"""
