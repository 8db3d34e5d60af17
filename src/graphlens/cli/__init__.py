"""graphlens command line interface."""
