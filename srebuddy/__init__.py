"""
SreBuddy - AI-powered assistant for SRE tasks.

Turns free-text operational requests into structured task descriptors,
implementation plans and prompts for a downstream language model.
"""

__version__ = "0.1.0"
__author__ = "SreBuddy Contributors"
