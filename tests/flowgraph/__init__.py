"""
Flow Graph Tests Package.

Tests for the core.flowgraph module including:
- GraphModel snapshot primitives
- ConnectionManager gesture resolution
- Validation and compilation
- Reconstruction, loading and local storage
- Editing session scenarios
"""
