"""
Integration tests for the orchestration layer.

Test components together:
- Failover flows with real tasks and provider clients (marked with @pytest.mark.integration)
- API endpoints (FastAPI TestClient with dependency overrides)
"""
