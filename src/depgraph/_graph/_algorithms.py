"""Depth-first traversals over dependency graphs."""

from collections.abc import Callable, Hashable, Iterable, Iterator

from depgraph._errors import CircularDependencyError
from depgraph._linked_list import LinkedList


def _postorder[T: Hashable](
    successors: Callable[[T], Iterable[T]],
    start: T,
    visited: set[T],
) -> Iterator[T]:
    """Yield ``start`` and every unvisited node reachable from it, children first.

    Nodes are marked visited when first entered, exactly like the recursive
    formulation. An explicit stack of child iterators replaces recursion.
    """
    visited.add(start)
    stack = [(start, iter(successors(start)))]
    while stack:
        node, children = stack[-1]
        for child in children:
            if child not in visited:
                visited.add(child)
                stack.append((child, iter(successors(child))))
                break
        else:
            stack.pop()
            yield node


def topological_dependents[T: Hashable](
    successors: Callable[[T], Iterable[T]],
    start: T,
    visited: set[T] | None = None,
    result: LinkedList[T] | None = None,
) -> LinkedList[T]:
    """Collect ``start`` and its transitive dependents in topological order.

    Each node is prepended to ``result`` after all of its dependents, so in
    head-to-tail order every node precedes the nodes reachable from it.

    Args:
        successors: Function returning the direct dependents of a node.
        start: Node to start the traversal from.
        visited: Nodes to skip. Updated in place so that several traversals
            can share it.
        result: List to prepend into. A new one is created if omitted.

    Returns:
        The accumulating list, with ``start`` at its head.

    Example:
        >>> graph = {"a": ["b", "c"], "b": [], "c": ["b"]}
        >>> str(topological_dependents(graph.__getitem__, "a"))
        'a c b'

    """
    if visited is None:
        visited = set()
    if result is None:
        result = LinkedList()
    for node in _postorder(successors, start, visited):
        result.insert(node)
    return result


def topological_sort[T: Hashable](
    nodes: Iterable[T],
    successors: Callable[[T], Iterable[T]],
) -> LinkedList[T]:
    """Sort every node so that each appears before the nodes it reaches.

    Traversals start from each node of ``nodes`` in turn, skipping nodes
    already reached, which covers disconnected components.
    """
    visited: set[T] = set()
    result: LinkedList[T] = LinkedList()
    for node in nodes:
        if node not in visited:
            topological_dependents(successors, node, visited, result)
    return result


def check_for_cycle[T: Hashable](successors: Callable[[T], Iterable[T]], root: T) -> None:
    """Raise if ``root`` can be reached again from its own dependents.

    Raises:
        CircularDependencyError: As soon as a dependent equal to ``root`` is
            found. Its ``cycle`` holds the path that was walked.

    """
    visited = {root}
    path = [root]
    stack = [iter(successors(root))]
    while stack:
        for child in stack[-1]:
            if child == root:
                raise CircularDependencyError(root, [*path, root])
            if child not in visited:
                visited.add(child)
                path.append(child)
                stack.append(iter(successors(child)))
                break
        else:
            stack.pop()
            path.pop()
