"""
AI Services Package

Completion clients (Anthropic, OpenAI), the Stability image client, prompt
templates and completion parsing used by the brand generators.
"""
