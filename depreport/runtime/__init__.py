"""Runtime helpers shared by the command-line harness."""
