"""
Convert natural language queries to shell commands using the Gemini API.

This package provides a command-line tool that asks Google's Gemini API for
the shell command matching a plain-language request. Released builds can also
upgrade their own executable in place from the published GitHub releases.

The version of a build lives in ``termwise.build``.
"""
