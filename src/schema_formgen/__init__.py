"""
schema-formgen: schema-driven form generation.

Builds forms from a schema description instead of hand-written widgets.

Architecture:
- schema: immutable schema nodes, constructor functions, dataclass adapter
- forms: classification, default values, type resolution, control registry,
  empty-value normalization, array fields and the headless ``SchemaForm``
- services: dispatch base classes shared by the form engine
- qt: PyQt6 controls and the ``QtFormRenderer``
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
