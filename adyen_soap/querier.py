from typing import Any, Callable, List, Optional, TypeVar, Union

from lxml import etree

from adyen_soap.writer import NAMESPACES

T = TypeVar("T")


class XMLQuerier:
    """
    Thin wrapper around an lxml node set that answers namespaced XPath
    queries with plain strings.

    Missing nodes never raise: ``text`` returns an empty string, and
    ``xpath`` returns an empty querier, so chained lookups on an unexpected
    document degrade to empty values.
    """

    def __init__(self, nodes: Union[List[Any], Any]):
        if isinstance(nodes, list):
            self.nodes = nodes
        else:
            self.nodes = [nodes] if nodes is not None else []

    @classmethod
    def xml(cls, data: Union[bytes, str, None]) -> "XMLQuerier":
        """Parses a raw document. Unparseable input yields an empty querier."""
        if not data:
            return cls([])
        if isinstance(data, str):
            data = data.encode("utf-8")
        try:
            parser = etree.XMLParser(resolve_entities=False, no_network=True)
            return cls(etree.fromstring(data.strip(), parser=parser))
        except (etree.XMLSyntaxError, ValueError):
            return cls([])

    def xpath(
        self, query: str, block: Optional[Callable[["XMLQuerier"], T]] = None
    ) -> Union["XMLQuerier", T]:
        """
        Evaluates ``query`` against the first node. When ``block`` is given it
        is called with the result querier and its return value is returned.
        """
        result = XMLQuerier(self._evaluate(query))
        if block is not None:
            return block(result)
        return result

    def text(self, query: str) -> str:
        nodes = self._evaluate(query)
        if not nodes:
            return ""
        node = nodes[0]
        if isinstance(node, str):
            return node.strip()
        return "".join(node.itertext()).strip()

    def children(self) -> List["XMLQuerier"]:
        return [XMLQuerier(child) for node in self.nodes for child in node if isinstance(child.tag, str)]

    def each(self) -> List["XMLQuerier"]:
        return [XMLQuerier(node) for node in self.nodes]

    def empty(self) -> bool:
        return not self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def _evaluate(self, query: str) -> List[Any]:
        if not self.nodes:
            return []
        result = self.nodes[0].xpath(query, namespaces=NAMESPACES)
        if isinstance(result, list):
            return result
        return [str(result)]
