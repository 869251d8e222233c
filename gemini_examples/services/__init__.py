# -*- coding: utf-8 -*-
"""Service wrappers around the Gemini API and local media handling."""
