# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.
"""Build a segment tree from a gin config and answer a few range queries.

    python examples/range_query_example.py \
        --gin_file=examples/range_max.gin \
        --gin_param='range_query_example.segments=[(0, 3), (2, 8)]'
"""

import random

import gin
from absl import app
from absl import flags
from absl import logging

from segtree import IntegerSegmentTree, tree_structure_str

flags.DEFINE_multi_string('gin_file', None, 'Paths to the gin config files.')
flags.DEFINE_multi_string('gin_param', None, 'Gin binding parameters.')

FLAGS = flags.FLAGS


@gin.configurable
def range_query_example(size=16,
                        max_value=100,
                        segments=((0, 4), (3, 11)),
                        num_updates=8):
    """
    Args:
        size (int): number of elements
        max_value (int): elements are drawn from ``[0, max_value]``
        segments (list[tuple[int, int]]): ``[left, right)`` segments to query
        num_updates (int): number of random updates done before querying
    """
    vals = [random.randint(0, max_value) for _ in range(size)]
    tree = IntegerSegmentTree(elements=vals)
    logging.info("elements: %s", tree.to_list())
    for _ in range(num_updates):
        idx = random.randint(0, size - 1)
        root = tree.update(idx, random.randint(0, max_value))
        logging.info("tree[%d] = %d, combination of all elements: %d", idx,
                     tree[idx], root)
    for left, right in segments:
        logging.info("combination of [%d, %d): %d", left, right,
                     tree.combination(left, right))
    logging.debug(tree_structure_str(tree))


def main(_):
    logging.set_verbosity(logging.INFO)
    gin.parse_config_files_and_bindings(FLAGS.gin_file, FLAGS.gin_param)
    range_query_example()


if __name__ == '__main__':
    app.run(main)
