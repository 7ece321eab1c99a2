# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.
"""Segment trees storing their elements in numpy arrays.

They behave exactly like ``FixedSizeSegmentTree``. Values are kept unboxed
in a typed array and handed back as python ``bool`` or ``int``.
"""

import gin
import numpy as np

from segtree.segment_tree import FixedSizeSegmentTree


@gin.configurable
class BooleanSegmentTree(FixedSizeSegmentTree):
    def __init__(self, op, elements):
        """
        Args:
            op (callable): associative operator on two bools, e.g.
                ``operators.AND``
            elements (iterable[bool]): the initial elements
        """
        super(BooleanSegmentTree, self).__init__(op, elements, dtype=np.bool_)


@gin.configurable
class IntegerSegmentTree(FixedSizeSegmentTree):
    """Elements are 64 bit signed integers.

    Like any int64 numpy arithmetic, a combination which overflows wraps
    around instead of growing.
    """

    def __init__(self, op, elements):
        """
        Args:
            op (callable): associative operator on two integers, e.g.
                ``operators.ADD``
            elements (iterable[int]): the initial elements
        """
        super(IntegerSegmentTree, self).__init__(op, elements, dtype=np.int64)
