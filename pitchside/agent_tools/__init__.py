"""
Integration helpers exposing player statistics tools to agent frameworks.
"""

__all__ = [
    "register_player_stats_tools",
    "init_session_with_player_stats_tools",
    "search_player",
    "analyze_player",
    "analyze_historical_stats",
    "compare_stats",
    "build_player_stats_tools",
]


_LAZY_IMPORTS = {
    name: ("pitchside.agent_tools.player_stats", name) for name in __all__
}


def __getattr__(name):
    if name not in _LAZY_IMPORTS:
        raise AttributeError(f"module 'pitchside.agent_tools' has no attribute '{name}'")
    module_name, attr_name = _LAZY_IMPORTS[name]
    module = __import__(module_name, fromlist=[attr_name])
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
