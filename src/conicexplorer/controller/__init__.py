"""
The CONTROLLER layer talks to the outside world (the remote explanation
service) and runs blocking work off the GUI thread.
"""
