"""
Test suite for WorldWater

Unit tests for the simulation engine, scenario resolver, flood compositor
and session, plus API and CLI tests driven through TestClient and CliRunner.
"""
