from lxml import etree

from adyen_soap.testing import build_http_response
from adyen_soap.writer import NAMESPACES


class FakeSession:
    """Stands in for ``requests.Session``, recording posts and replaying a canned answer."""

    def __init__(self, body="", status_code=200):
        self.body = body
        self.status_code = status_code
        self.posts = []
        self.error = None

    def respond_with(self, body, status_code=200):
        self.body = body
        self.status_code = status_code

    def fail_with(self, error):
        self.error = error

    def post(self, url, **kwargs):
        self.posts.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return build_http_response(self.body, self.status_code)

    @property
    def last_post(self):
        return self.posts[-1]

    def posted_request(self):
        """The request element of the last posted envelope."""
        _, kwargs = self.last_post
        envelope = etree.fromstring(kwargs["data"])
        return envelope.xpath("/soap:Envelope/soap:Body/*", namespaces=NAMESPACES)[0]


def text(node, query):
    return "".join(node.xpath(f"{query}/text()", namespaces=NAMESPACES))


def xpath(node, query):
    return node.xpath(query, namespaces=NAMESPACES)
