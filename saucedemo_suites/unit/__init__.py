"""Browser-free unit tests of the UI framework."""
