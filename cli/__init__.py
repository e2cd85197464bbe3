# Command line entry points.
