""" Small is beautiful. These algorithms need no introduction. """

from collections import deque

def transitive_closure(roots, successors) -> set:
	"""
	Transitive closure is a simple application of graph search.
	(This particular implementation is breadth-first.)
	
	This function does not expect any particular data structure.
	Rather, it takes the graph's outbound-edge relation as a callable parameter.
	It requires:
		``roots`` is an iterable of nodes;
		each node is hashable;
		and ``successors(aNode)`` returns an iterable of nodes.
	"""
	return set(breadth_first(roots, successors))

def breadth_first(roots, successors) -> list:
	""" Same idea, but the answer is a list in order of discovery, roots first. """
	seen = set()
	order = []
	queue = deque()
	for item in roots:
		if item not in seen:
			seen.add(item)
			order.append(item)
			queue.append(item)
	while queue:
		for item in successors(queue.popleft()) or ():
			if item not in seen:
				seen.add(item)
				order.append(item)
				queue.append(item)
	return order
