"""
jumpapp

Jump to an application's window if it is running, launch it otherwise.
Repeated invocations cycle through the application's windows.
"""

__version__ = "1.0.0"
