"""
Topics RW Test Suite
====================

Test organization:
- tests/unit/          - Neo4j client and logging tests (mocked driver)
- tests/services/      - Topic store, model and route tests (mocked store/client)
- tests/integration/   - Round trips against a live Neo4j (require NEO4J_TEST_URI)

Run tests:
    pytest                          # All tests
    pytest tests/unit               # Unit tests only
    pytest -m "not integration"     # Skip integration tests

Integration tests:
    The round trip, overwrite, delete and count behaviour is only exercised
    end to end by tests/integration, which skips itself unless NEO4J_TEST_URI
    is set. CI runs it against a throwaway Neo4j 5 container:

        docker run -d --name neo4j-test -p 7687:7687 \\
            -e NEO4J_AUTH=neo4j/testpassword neo4j:5
        NEO4J_TEST_URI=bolt://localhost:7687 \\
        NEO4J_TEST_USER=neo4j \\
        NEO4J_TEST_PASSWORD=testpassword \\
            pytest -m integration

    The suite writes and deletes the topic with uuid 12345 and a Content node
    with uuid c-1, so point it at a database with no data you need to keep.
"""
