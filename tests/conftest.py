"""
Shared fixtures: a small schema, its introspection result, and a recording
HTTP stub for httpx.
"""

import json
from typing import Callable, List

import httpx
import pytest
from graphql import build_schema, get_introspection_query, graphql_sync

from mcp_graphql.config import GraphQLServerConfig

ENDPOINT = "https://api.example.com/graphql"

HELLO_SDL = """\
type Query {
  hello: String
}
"""

LIBRARY_SDL = '''\
"""A thing that can be borrowed"""
interface Node {
  id: ID!
}

"""A book on the shelf"""
type Book implements Node {
  id: ID!
  title: String
  """Authors, optionally limited"""
  authors(limit: Int = 10, "Sort order" order: Order): [Author!]!
}

type Author implements Node {
  id: ID!
  name: String!
}

union SearchResult = Book | Author

"""Sort direction"""
enum Order {
  """Ascending"""
  ASC
  DESC
}

input BookInput {
  """Display title"""
  title: String!
  authorIds: [ID!]
}

"""An ISO-8601 date"""
scalar Date

type Query {
  hello: String
  book(id: ID!): Book
  search(term: String!): [SearchResult!]!
  today: Date
}

type Mutation {
  addBook(input: BookInput!): Book
}
'''


def introspection_payload(sdl: str) -> dict:
    result = graphql_sync(build_schema(sdl), get_introspection_query())
    assert result.errors is None
    return {"data": result.data}


class RecordingTransport:
    """httpx handler that records every request and replies via ``responder``."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def config() -> GraphQLServerConfig:
    return GraphQLServerConfig(endpoint=ENDPOINT)


@pytest.fixture
def introspection_transport() -> RecordingTransport:
    payload = introspection_payload(LIBRARY_SDL)
    return RecordingTransport(lambda request: httpx.Response(200, json=payload))
