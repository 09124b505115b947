from treebot.agents.random import RandomAgent
from treebot.agents.tree import TreeSearchAgent

__all__ = ["RandomAgent", "TreeSearchAgent"]
