# -*- coding: utf-8 -*-
"""
Scripts package — CLI entry points.
`run_example` is interactive; `run_flow` prints clean JSON to stdout and
uses stderr/logging for debug.
"""
