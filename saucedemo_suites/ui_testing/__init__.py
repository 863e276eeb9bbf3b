"""UI testing: framework, page objects and browser tests."""
