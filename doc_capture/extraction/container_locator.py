from collections.abc import Mapping, Sequence

from doc_capture.logging.logger import Log

_CONTAINER_LIST_MARKER = "containerlist"


def find_container_list(root: object) -> object:
    """Return the value of the first key containing "containerList" (any case).

    Searches depth-first in document order and enters each mapping or
    sequence once. Returns None when nothing matches or the payload cannot
    be walked.
    """
    visited: set[int] = set()
    stack: list[object] = [root]
    try:
        while stack:
            node = stack.pop()
            if isinstance(node, (str, bytes, bytearray, memoryview)):
                continue
            if not isinstance(node, (Mapping, Sequence)) or id(node) in visited:
                continue
            visited.add(id(node))
            if isinstance(node, Mapping):
                for key, value in node.items():
                    if _CONTAINER_LIST_MARKER in str(key).lower():
                        return value
                stack.extend(reversed(list(node.values())))
            else:
                stack.extend(reversed(list(node)))
    except Exception as exc:
        Log.warning(f"Container list lookup failed: {exc!r}")
    return None
