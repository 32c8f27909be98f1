# Quick reference commands (run from repo root). These are comments only; copy/paste as needed.

# Install dependencies (test extra includes httpx for TestClient)
# python -m pip install -e ".[test]"
# python -m playwright install chromium

# Run the full test suite
# python -m pytest

# Run focused test files
# python -m pytest tests/test_intervals.py tests/test_filtering.py
# python -m pytest tests/test_extractor.py tests/test_engine_pipeline.py
# python -m pytest tests/test_scheduler.py
# python -m pytest tests/test_api_routes.py tests/test_security_headers.py

# Start the API locally (with env vars loaded)
# python -m dotenv run -- python -m uvicorn app.api:app --reload --port 3000
# python main.py

# Try the endpoints
# curl -X POST "localhost:3000/api/search?page=1&limit=15" -H "Content-Type: application/json" -d '{"keywords": ["Assistant"]}'
# curl -X POST localhost:3000/api/start-job -H "Content-Type: application/json" -d '{"keywords": ["Assistant"], "interval": "1 hour", "phoneNo": "+15550100"}'
# curl localhost:3000/api/job-status
# curl -X POST localhost:3000/api/stop-job

# Run the scheduler without the API
# python -m dotenv run -- python -m worker.main --keywords Assistant Clerk --interval "1 hour" --phone +15550100
# python -m worker.main --keywords Assistant --interval "1 min" --phone +15550100 --once
