# -*- coding: utf-8 -*-
"""
Flows package — one flow per example scenario.
Importing the package registers every flow with the registry.
"""

from gemini_examples.flows.base_flow import (  # noqa: F401
    FlowError,
    get_flow,
    list_flows,
)
from gemini_examples.flows import (  # noqa: F401
    image_flows,
    speech_flows,
    story_flow,
    video_flows,
)
