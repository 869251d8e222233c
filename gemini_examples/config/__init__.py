# -*- coding: utf-8 -*-
"""Configuration package — settings, scenario registry and prompts."""
