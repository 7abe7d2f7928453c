"""GraphQL router for the event server."""

from fastapi import APIRouter
from fastapi.requests import HTTPConnection
from strawberry.fastapi import GraphQLRouter
from strawberry.subscriptions import GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL

from event_server.graphql.context import GraphQLContext
from event_server.graphql.schema import schema


async def get_context(connection: HTTPConnection) -> GraphQLContext:
    """Get the GraphQL context for an HTTP request or a WebSocket connection.

    Args:
        connection: The incoming connection; its app holds the service registry

    Returns:
        A GraphQLContext instance for GraphQL resolvers
    """
    return GraphQLContext(registry=connection.app.state.registry)


def create_graphql_router(graphql_ide: bool = True) -> APIRouter:
    """Create the GraphQL router serving queries, mutations and subscriptions.

    Args:
        graphql_ide: Serve GraphiQL on GET requests

    Returns:
        The GraphQL router
    """
    graphql_router = GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="graphiql" if graphql_ide else None,
        subscription_protocols=(GRAPHQL_TRANSPORT_WS_PROTOCOL, GRAPHQL_WS_PROTOCOL),
        tags=["GraphQL"],
    )
    return graphql_router
