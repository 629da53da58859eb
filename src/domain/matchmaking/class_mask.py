"""Class id to class-stacking bitmask mapping."""

from __future__ import annotations

from collections.abc import Iterable

# Class 10 is an unused slot, so class 11 takes bit 10.
CLASS_MASK_BITS: dict[int, int] = {
    1: 1 << 0,
    2: 1 << 1,
    3: 1 << 2,
    4: 1 << 3,
    5: 1 << 4,
    6: 1 << 5,
    7: 1 << 6,
    8: 1 << 7,
    9: 1 << 8,
    11: 1 << 10,
}


def class_id_to_mask_bit(class_id: int) -> int:
    return CLASS_MASK_BITS.get(class_id, 0)


def class_mask_from_ids(class_ids: Iterable[int]) -> int:
    """OR together the bits of several class ids."""
    mask = 0
    for class_id in class_ids:
        bit = class_id_to_mask_bit(class_id)
        if bit == 0:
            raise ValueError(f"class_id={class_id} has no class-stacking bit")
        mask |= bit
    return mask


def class_in_mask(class_id: int, class_mask: int) -> bool:
    """A zero mask selects every class."""
    if class_mask == 0:
        return True
    return bool(class_mask & class_id_to_mask_bit(class_id))


__all__ = ["CLASS_MASK_BITS", "class_id_to_mask_bit", "class_in_mask", "class_mask_from_ids"]
