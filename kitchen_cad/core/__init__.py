"""Core services — auto-layout orchestration, credits and error types.

  errors        Exception hierarchy shared by the planner, service and web API.
  credits       Credit ledger collaborator (deduct before generating).
  auto_layout   Single-flight AI auto-layout with atomic model replacement.
"""
