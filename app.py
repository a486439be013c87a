"""
statworks: GitHub profile summary cards (Flask)

What it does:
- Accepts a GitHub username
- Reads public repositories (forks and archived skipped, capped at 400) and
  their language byte counts
- Samples the first 3 pages of the public event feed for commits, pull
  requests and issues (an approximation of recent activity)
- Renders an SVG card with the totals and a top-5 language ring chart
- Caches rendered cards per request URL and per user+theme (6 hours);
  error cards are never cached

Setup:
  pip install -e .

Run:
  python app.py
  open http://localhost:5000/summary?user=octocat

Endpoints:
  GET /health                                   -> "statworks"
  GET /summary?user=&background-color=&text-color=  -> SVG card
  GET /api/summary                              -> same as /summary
"""

from __future__ import annotations

from statworks.app import create_app
from statworks.config import Settings

settings = Settings.from_env()
app = create_app(settings)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=settings.port, debug=False)
