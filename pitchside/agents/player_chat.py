"""Interactive Agentscope chat agent using the player statistics toolkit."""
from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Sequence

from requests.exceptions import RequestException

if __package__ in {None, ""}:
    sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from agentscope.agent import ReActAgent
from agentscope.formatter import AnthropicChatFormatter, OpenAIChatFormatter
from agentscope.message import Msg
from agentscope.model import AnthropicChatModel, OpenAIChatModel
from agentscope.tool import Toolkit

from pitchside.agent_tools.player_stats import init_session_with_player_stats_tools
from pitchside.config import APISettings
from pitchside.services.player_stats import PlayerStatsGateway

LOGGER = logging.getLogger(__name__)

ANALYSIS_SECTIONS = (
    (
        "Physical Attributes Analysis",
        "Provide an in-depth assessment of the player's physical attributes "
        "(pace, stamina, strength, agility, etc.). Compare to league averages.",
    ),
    (
        "Technical Skills Analysis",
        "Evaluate passing, shooting, dribbling, ball control, and defensive skills with specific stats.",
    ),
    (
        "General Performance Data",
        "Present detailed statistics from the current season (appearances, goals, assists, xG, etc.).",
    ),
    (
        "Trends and Development Insights",
        "Compare current season data with previous seasons to identify trends.",
    ),
    (
        "Transfer Potential and Recommendations",
        "Summarize the player's contribution and potential, recommending suitable clubs or tactical systems.",
    ),
)


def _system_prompt() -> str:
    """
    Build the analyst persona prompt with its five-part report structure.
    """
    sections = "\n".join(
        f"{index}. {title}:\n   {body}"
        for index, (title, body) in enumerate(ANALYSIS_SECTIONS, start=1)
    )
    guidelines = "\n".join(
        [
            "Guidelines:",
            "- Resolve player ids with `search_player` before calling any other tool.",
            "- Use `analyze_player` for the current season, `analyze_historical_stats` for career "
            "totals, and `compare_stats` when the user asks to compare two or more players.",
            "- Category ids for `compare_stats` come from the `typeIds` field of an analysis result.",
            "- When a tool returns an error message, explain it instead of repeating the same call.",
        ]
    )
    return (
        "You are the assistant of a perfectionist football analysis expert, specializing in "
        "in-depth, data-driven player evaluations. Your job is to deliver comprehensive, "
        "structured, and thoroughly researched analysis, leaving no detail unchecked. You must "
        "use the most recent and accurate data available, ensuring all insights are supported "
        "by concrete evidence.\n\n"
        "When analyzing players, follow this structure:\n\n"
        f"{sections}\n\n"
        "Always incorporate the latest data provided (such as BeSoccer statistics) and maintain "
        "a professional, unbiased tone.\n\n"
        f"{guidelines}"
    )


def _resolve_provider_and_model(
    *,
    model: str | None,
    provider: str | None,
) -> tuple[str, str]:
    """Resolve which provider/model to use based on args and env.

    Returns a tuple of (provider, model_name). Provider is one of
    "anthropic" or "openai".
    """
    env_provider = (provider or os.getenv("LLM_PROVIDER") or os.getenv("PITCHSIDE_LLM_PROVIDER") or "").strip().lower()
    candidate_model = (model or os.getenv("LLM_MODEL") or "").strip()

    if "claude" in candidate_model.lower():
        env_provider = env_provider or "anthropic"

    if not env_provider:
        env_provider = "openai"

    if env_provider not in {"anthropic", "openai"}:
        raise ValueError(f"Unsupported LLM provider '{env_provider}'. Use 'anthropic' or 'openai'.")

    if not candidate_model:
        if env_provider == "anthropic":
            candidate_model = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-20250514")
        else:
            candidate_model = os.getenv("OPENAI_MODEL", "gpt-4o")

    return env_provider, candidate_model


def _build_toolkit(
    project: str | None,
    activate_tool_group: bool,
    *,
    gateway: PlayerStatsGateway | None = None,
    logging_level: str = "INFO",
    studio_url: str | None = None,
    tracing_url: str | None = None,
) -> Toolkit:
    studio_url = studio_url or os.getenv("AGENTSCOPE_STUDIO_URL") or None
    tracing_url = tracing_url or os.getenv("AGENTSCOPE_TRACING_URL") or None
    try:
        return init_session_with_player_stats_tools(
            project=project,
            logging_level=logging_level,
            studio_url=studio_url,
            tracing_url=tracing_url,
            gateway=gateway,
            activate=activate_tool_group,
        )
    except RequestException as exc:
        LOGGER.warning(
            "AgentScope Studio unavailable at %s (%s); proceeding without Studio/Tracing hooks.",
            studio_url,
            exc,
        )
        return init_session_with_player_stats_tools(
            project=project,
            logging_level=logging_level,
            gateway=gateway,
            activate=activate_tool_group,
        )


def _build_model_formatter(
    *,
    model: str | None,
    provider: str | None,
) -> tuple[AnthropicChatModel | OpenAIChatModel, AnthropicChatFormatter | OpenAIChatFormatter]:
    provider_resolved, model_name = _resolve_provider_and_model(model=model, provider=provider)

    if provider_resolved == "anthropic":
        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise RuntimeError("ANTHROPIC_API_KEY is required for provider 'anthropic'.")
        return AnthropicChatModel(model_name=model_name, api_key=api_key), AnthropicChatFormatter()
    return (
        OpenAIChatModel(model_name=model_name, api_key=os.getenv("OPENAI_API_KEY")),
        OpenAIChatFormatter(),
    )


def build_chat_agent(
    *,
    project: str | None = "pitchside-chat",
    model: str | None = None,
    provider: str | None = None,
    openai_api_key: str | None = None,
    settings: APISettings | None = None,
    gateway: PlayerStatsGateway | None = None,
    activate_tool_group: bool = True,
    logging_level: str = "INFO",
    studio_url: str | None = None,
    tracing_url: str | None = None,
) -> ReActAgent:
    """Create a ReAct agent wired to the player statistics tools.

    The agent alternates model turns and tool calls for at most
    ``settings.max_tool_rounds`` rounds before it must answer without tools.
    Its tools dispatch through ``gateway``, or a gateway built from
    ``settings`` so the mocks flag travels with them.
    """

    if openai_api_key:
        os.environ.setdefault("OPENAI_API_KEY", openai_api_key)

    settings = settings or APISettings.from_env()
    gateway = gateway or PlayerStatsGateway(settings=settings)
    toolkit = _build_toolkit(
        project,
        activate_tool_group,
        gateway=gateway,
        logging_level=logging_level,
        studio_url=studio_url,
        tracing_url=tracing_url,
    )
    chat_model, formatter = _build_model_formatter(model=model, provider=provider)

    return ReActAgent(
        name="football-analyst",
        sys_prompt=_system_prompt(),
        model=chat_model,
        formatter=formatter,
        toolkit=toolkit,
        max_iters=settings.max_tool_rounds,
    )


def chat(
    messages: Sequence[str],
    *,
    project: str | None = "pitchside-chat",
    model: str | None = None,
    provider: str | None = None,
    openai_api_key: str | None = None,
    settings: APISettings | None = None,
) -> list[str]:
    """Convenience function to run a short scripted dialogue."""

    agent = build_chat_agent(
        project=project,
        model=model,
        provider=provider,
        openai_api_key=openai_api_key,
        settings=settings,
    )

    async def _run_dialog() -> list[str]:
        outputs: list[str] = []
        for user_text in messages:
            user_msg = Msg(name="user", role="user", content=user_text)
            try:
                reply_msg = await agent.reply(user_msg)
            except Exception as exc:  # pylint: disable=broad-except
                LOGGER.exception("Agent execution failed")
                outputs.append(f"Agent execution error: {exc}")
                break
            outputs.append(reply_msg.get_text_content() or "")
        return outputs

    return asyncio.run(_run_dialog())


if __name__ == "__main__":  # pragma: no cover - manual smoke test
    prompt = sys.argv[1] if len(sys.argv) > 1 else "How is Messi performing this season?"
    print(chat([prompt])[-1])
