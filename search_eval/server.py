"""
MCP server exposing collection search and precision-recall evaluation.
"""

import logging
from pathlib import Path

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from search_eval.config import get_config, Transport
from search_eval.evaluation.retrievers.corpus_retriever import CorpusRetriever
from search_eval.packages.corpus import DocumentCollection
from search_eval.tools.tools import EvaluateTool, SearchTool

# Configure logging
logger = logging.getLogger(__name__)

# Load .env.local from project root (must run from project root)
env_local_path = Path('.env.local')
if env_local_path.exists():
    load_dotenv(env_local_path)
    logger.info("Loaded .env.local for local development")
else:
    logger.info("No .env.local file found")


def main():
    # Load configuration from environment variables and command-line arguments
    config = get_config()

    # Configure logging
    logging.basicConfig(level=config.log_level)

    if config.corpus_path is None:
        raise ValueError("No corpus given. Pass --corpus or set CORPUS_PATH.")

    # Create MCP server with configuration
    mcp = FastMCP(host=config.host, port=config.port)

    # Load and index the collection once for all tool calls
    collection = DocumentCollection.from_xml(config.corpus_path)
    retriever = CorpusRetriever(collection, config.scheme, limit=config.search_limit)

    # Register tools
    tools = [
        SearchTool(retriever, config.task_number),
        EvaluateTool(retriever, config.task_number),
    ]

    for tool in tools:
        mcp.add_tool(tool.execute,
                     name=tool.name,
                     title=tool.title,
                     description=tool.description,
                     annotations=tool.annotations,
                     structured_output=getattr(tool, 'structured_output', None))

    # Run server with configured transport
    if config.transport == Transport.STDIO:
        logger.info("Running server with stdio transport")
        mcp.run(transport="stdio")
    elif config.transport == Transport.STREAMABLE_HTTP:
        logger.info(
            f"Running server with Streamable HTTP transport, address http://{config.host}:{config.port}/mcp.")
        mcp.run(transport="streamable-http")
    else:
        logger.error(f"Unexpected transport: {config.transport}")
        raise ValueError(f"Unknown transport: {config.transport}")


if __name__ == "__main__":
    main()
