"""
Unit Tests for Health Check Endpoints
"""
import pytest
from httpx import AsyncClient


class TestHealth:

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient):
        response = await client.get('/api/v1/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'
        assert 'X-Request-ID' in response.headers

    @pytest.mark.asyncio
    async def test_readiness(self, client: AsyncClient):
        response = await client.get('/api/v1/health/ready')

        assert response.status_code == 200
        data = response.json()
        assert data['status'] == 'ready'
        assert data['checks']['database']['tables_ready'] is True
        assert data['checks']['payments']['configured'] is True

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        response = await client.get('/')

        assert response.status_code == 200
        assert response.json()['health'] == '/api/v1/health'
