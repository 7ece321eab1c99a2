# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.

from segtree.errors import (SegmentTreeError, IndexOutOfRange, InvalidRange,
                            EmptyTreeError, UnsupportedMutation, TypeMismatch,
                            IllegalCursorState)
from segtree.segment_tree import (FixedSizeSegmentTree, SumSegmentTree,
                                  MaxSegmentTree, MinSegmentTree,
                                  tree_structure_str)
from segtree.primitive import BooleanSegmentTree, IntegerSegmentTree
from segtree.views import (FixedSizeSequence, SegmentTreeCursor,
                           SegmentTreeWindow)
from segtree import operators
