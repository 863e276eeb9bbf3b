"""
Test suites package.

Kept importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - reuse of the page objects and framework from other suites
"""
