"""
Scripted player agents that drive the engine through its public methods.
"""

from .base_agent import BaseAgent, AgentContext
from .scripted_agent import ScriptedAgent

__all__ = ['BaseAgent', 'AgentContext', 'ScriptedAgent']
