"""Components built on the engine session pipeline.

    search_interface.py  - controller owning an engine session
    search_consumer.py   - result list joining an existing session
    result_templates.py  - first-match result template selection
    case_flow.py         - case-assist flow screens
    aria_live_region.py  - live region announcing to assistive technology
"""
