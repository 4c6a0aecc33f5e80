"""
curlguard - Restricted curl execution for automated callers.

Package structure:
- probe: Extractor, lexer, policy, executor and diagnostic parser pipeline
- core: Config, logging, common types
- tools: Agent-facing tool wrapper
"""

__version__ = "0.1.0"
