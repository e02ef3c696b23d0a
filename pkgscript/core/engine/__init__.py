"""
Engine — selection and execution.

Flow:
    facts + config → select_variants → run_variants (via resolve_shell)
"""
