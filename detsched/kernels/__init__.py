"""Kernel layer.

- Feature-count dispatch (validation + theta.feature)
- Convex quality models
- L-ensemble assembly
"""
