"""
Agentscope toolkit integration for the player statistics tools.

Each tool set is bound to one :class:`PlayerStatsGateway`, so agents built
with different settings (mock or live) never share a dispatcher.
"""

import json
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple

import agentscope
from agentscope.message import TextBlock
from agentscope.tool import Toolkit, ToolResponse

from ..services.player_stats import PlayerStatsGateway, ToolResult, default_gateway


def _gateway() -> PlayerStatsGateway:
    return default_gateway()


def _tool_response(tool: str, arguments: Dict[str, Any], result: ToolResult) -> ToolResponse:
    metadata: Dict[str, Any] = {"tool": tool, "arguments": arguments}
    if isinstance(result, str):
        # Error and not-found messages are relayed to the model as plain prose.
        metadata["error"] = str(result)
        return ToolResponse(content=[TextBlock(type="text", text=str(result))], metadata=metadata)
    metadata["result"] = result
    text = json.dumps(result, ensure_ascii=False, default=str)
    return ToolResponse(content=[TextBlock(type="text", text=text)], metadata=metadata)


def build_player_stats_tools(
    resolve_gateway: Callable[[], PlayerStatsGateway],
) -> Tuple[Callable[..., Any], ...]:
    """
    Build the four tool functions dispatching through ``resolve_gateway()``.

    The returned functions keep the names, signatures and docstrings the
    toolkit turns into JSON schemas.
    """

    async def search_player(name: str) -> ToolResponse:
        """Search for a player by name to get their ID.

        Args:
            name (str):
                The name of the player to search for.
        """
        result = await resolve_gateway().search_players(name)
        return _tool_response("search_player", {"name": name}, result)

    async def analyze_player(player_id: int) -> ToolResponse:
        """Get detailed analysis of a player's current season with previous season comparison.

        Args:
            player_id (int):
                The ID of the player to analyze.
        """
        result = await resolve_gateway().analyze_player(player_id)
        return _tool_response("analyze_player", {"player_id": player_id}, result)

    async def analyze_historical_stats(player_id: int) -> ToolResponse:
        """Get aggregated historical statistics for a player across all seasons.

        Args:
            player_id (int):
                The ID of the player to analyze.
        """
        result = await resolve_gateway().analyze_historical_stats(player_id)
        return _tool_response("analyze_historical_stats", {"player_id": player_id}, result)

    async def compare_stats(
        player_ids: List[int],
        chart_type: Literal["radar", "bar"],
        stat_categories: List[int],
    ) -> ToolResponse:
        """Compare statistics between two or more players using charts.

        Args:
            player_ids (List[int]):
                Array of player IDs to compare.
            chart_type (Literal["radar", "bar"]):
                Type of chart to generate.
            stat_categories (List[int]):
                Array of category ids (see typeIds) to compare.
        """
        result = await resolve_gateway().compare_players(player_ids, chart_type, stat_categories)
        return _tool_response(
            "compare_stats",
            {
                "player_ids": player_ids,
                "chart_type": chart_type,
                "stat_categories": stat_categories,
            },
            result,
        )

    return search_player, analyze_player, analyze_historical_stats, compare_stats


# Module-level tools resolve the process-wide gateway on every call.
search_player, analyze_player, analyze_historical_stats, compare_stats = build_player_stats_tools(
    lambda: _gateway()
)

_DESCRIPTIONS = {
    "search_player": "Search for a player by name to get their ID.",
    "analyze_player": "Get detailed analysis of a player's current season "
    "with previous season comparison.",
    "analyze_historical_stats": "Get aggregated historical statistics for a player across all seasons.",
    "compare_stats": "Compare statistics between two or more players using charts.",
}


def register_player_stats_tools(
    toolkit: Optional[Toolkit] = None,
    *,
    gateway: Optional[PlayerStatsGateway] = None,
    group_name: str = "player-stats",
    activate: bool = True,
) -> Toolkit:
    """
    Register the player statistics tools with an Agentscope toolkit.

    Args:
        toolkit: Optional existing toolkit to extend. A new Toolkit is created
            when omitted.
        gateway: Dispatcher the registered tools call. The process-wide
            default gateway is used when omitted.
        group_name: Tool group label used inside the toolkit.
        activate: Whether to activate the tool group immediately.

    Returns:
        The toolkit instance with the player tools registered.
    """
    toolkit = toolkit or Toolkit()
    try:
        toolkit.create_tool_group(
            group_name,
            description="Football player search, analysis and comparison.",
            active=activate,
            notes=(
                "Resolve a player id with `search_player` before calling the "
                "analysis tools. Category ids for `compare_stats` are listed in "
                "the `typeIds` field of any analysis result."
            ),
        )
    except ValueError:
        pass

    if gateway is None:
        tools = (search_player, analyze_player, analyze_historical_stats, compare_stats)
    else:
        tools = build_player_stats_tools(lambda: gateway)
    for tool in tools:
        toolkit.register_tool_function(
            tool,
            group_name=group_name,
            func_description=_DESCRIPTIONS[tool.__name__],
        )
    return toolkit


def init_session_with_player_stats_tools(
    *,
    project: Optional[str] = None,
    name: Optional[str] = None,
    logging_path: Optional[str] = None,
    logging_level: str = "INFO",
    studio_url: Optional[str] = None,
    tracing_url: Optional[str] = None,
    toolkit: Optional[Toolkit] = None,
    gateway: Optional[PlayerStatsGateway] = None,
    group_name: str = "player-stats",
    activate: bool = True,
) -> Toolkit:
    """Initialise Agentscope and register the player statistics tools."""

    agentscope.init(
        project=project,
        name=name,
        logging_path=logging_path,
        logging_level=logging_level,
        studio_url=studio_url,
        tracing_url=tracing_url,
    )
    return register_player_stats_tools(
        toolkit=toolkit,
        gateway=gateway,
        group_name=group_name,
        activate=activate,
    )
