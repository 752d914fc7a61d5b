"""
Unit tests for the orchestration layer.

Test individual components in isolation:
- Error classification and backoff planning
- Provider orchestrator (scripted clients, recorded sleeps)
- Extraction, validation and normalization of provider output
- Provider clients over httpx.MockTransport
- Prompt builder, tasks, services, repository, API dependencies
"""
