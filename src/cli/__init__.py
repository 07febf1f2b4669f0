"""Developer command line for previewing and replaying uploads."""
