# -*- coding: utf-8 -*-
"""
Gemini Examples Stack
=====================
Learning examples for Gemini text, speech, image and video generation,
plus an interactive runner that scaffolds example projects through the
Gemini CLI.
"""

__version__ = "0.1.0"
