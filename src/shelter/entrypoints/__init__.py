"""Entry points for SHELTER (currently the ``shelter`` command line)."""
