"""Ordered deep merge of envelope layers."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any


def domain_merge_layers(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge mapping layers in order with last-writer-wins semantics per key.

    When both the accumulated value and the incoming value under one key are
    mappings, they merge field by field. Any other incoming value, lists
    included, replaces the accumulated value. Inputs are never mutated and
    leaf values are deep-copied into the result.

    Args:
        layers: Mappings ordered from lowest to highest precedence. `None` entries are skipped.

    Returns:
        dict[str, Any]: New merged mapping.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    merged: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        _merge_into(merged, layer)
    return merged


def _merge_into(target: dict[str, Any], layer: Mapping[str, Any]) -> None:
    for key, value in layer.items():
        current_value = target.get(key)
        if isinstance(value, Mapping):
            if isinstance(current_value, dict):
                _merge_into(current_value, value)
            else:
                target[key] = domain_merge_layers(value)
            continue
        target[key] = copy.deepcopy(value)
