"""
Qt user interface: main window, page widgets and tool dialogs.
"""
