"""Run the proxy: python -m cricai

No HTML scraper is wired here, so match lists fall back from Cricbuzz to
ESPN and then to stale cache. Embed create_app(scraper=...) to add the
scrape tier.
"""

import uvicorn

from cricai.api import create_app
from cricai.config import Settings


def main() -> None:
    settings = Settings.from_env()
    app = create_app(settings)
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
