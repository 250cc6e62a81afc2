"""foldertasks: a folder-based personal task tracker."""

__version__ = "0.1.0"
