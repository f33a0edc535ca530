"""Serialization layer — models to text and back.

May import from domain and model.registry. The model base class imports
this layer, never the reverse.
"""

from decval.serialization.serializers import (
    JSONSerializer,
    Serialization,
    Serializer,
    YamlSerializer,
    to_plain,
)

__all__ = ["JSONSerializer", "Serialization", "Serializer", "YamlSerializer", "to_plain"]
