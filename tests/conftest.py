"""Pytest configuration and shared fixtures."""

import pytest

from linkscout.config import Settings


LISTING_HTML = """
<html>
<head><title>Backend Engineer jobs in Berlin | LinkedIn</title></head>
<body>
<div class="results-context-header">
  <h1 class="results-context-header__context">
    <span class="results-context-header__job-count">32,000+</span>
    Backend Engineer jobs in Berlin
  </h1>
</div>
<ul class="jobs-search__results-list">
  <li>
    <div class="base-card relative base-card--link base-search-card job-search-card"
         data-entity-urn="urn:li:jobPosting:123">
      <a class="base-card__full-link" href="/jobs/view/123">
        <span class="sr-only">Backend Engineer</span>
      </a>
      <div class="base-search-card__info">
        <h3 class="base-search-card__title">
          Backend   Engineer
        </h3>
        <h4 class="base-search-card__subtitle">
          <a href="https://www.linkedin.com/company/acme">Acme Corp</a>
        </h4>
        <div class="base-search-card__metadata">
          <span class="job-search-card__location">Berlin, Germany</span>
          <span class="job-search-card__salary-info">$120,000 - $150,000</span>
          <time class="job-search-card__listdate" datetime="2024-05-01">2 days ago</time>
        </div>
      </div>
    </div>
  </li>
  <li>
    <div class="base-card relative base-card--link base-search-card job-search-card"
         data-entity-urn="urn:li:jobPosting:456">
      <a class="base-card__full-link" href="/jobs/view/456"></a>
      <div class="base-search-card__info">
        <h3 class="base-search-card__title">Frontend Engineer</h3>
        <div class="base-search-card__metadata">
          <span class="job-search-card__location">Munich, Germany</span>
        </div>
      </div>
    </div>
  </li>
</ul>
</body>
</html>
"""


SIMILAR_JOBS_HTML = """
<html>
<body>
<section class="similar-jobs">
  <div class="base-card" data-tracking-control-name="public_jobs_similar-jobs">
    <a class="base-card__full-link" href="https://www.linkedin.com/jobs/view/999"></a>
    <h3 class="base-main-card__title">Data Engineer</h3>
    <h4 class="base-main-card__subtitle"><a href="#">Globex</a></h4>
    <span class="main-job-card__location">Remote</span>
    <time class="main-job-card__listdate">1 week ago</time>
  </div>
  <div class="base-card" data-tracking-control-name="public_jobs_similar-jobs">
    <h3 class="base-main-card__title">Orphan Title</h3>
  </div>
</section>
</body>
</html>
"""


DETAIL_HTML = """
<html>
<head>
  <title>Acme Corp hiring Senior Backend Engineer in Berlin | LinkedIn</title>
  <meta property="og:title" content="Acme Corp hiring Senior Backend Engineer in Berlin, Germany">
  <meta property="og:url" content="https://www.linkedin.com/jobs/view/og-123">
  <meta name="description" content="Posted 10:30:00 AM. Acme is looking for a backend engineer.">
  <meta name="companyId" content="4242">
  <meta name="titleId" content="9">
  <link rel="canonical" href="https://www.linkedin.com/jobs/view/senior-backend-engineer-at-acme-corp-123">
</head>
<body>
<section class="top-card-layout">
  <h1 class="top-card-layout__title topcard__title">Senior Backend Engineer</h1>
  <a class="topcard__org-name-link" href="https://www.linkedin.com/company/acme">  Acme Corp  </a>
  <span class="topcard__flavor topcard__flavor--bullet">Berlin, Germany</span>
  <span class="posted-time-ago__text">3 days ago</span>
  <span class="num-applicants__caption">Over 200 applicants</span>
</section>
<div class="compensation__salary">$120,000 - $150,000</div>
<div class="description__text">
  <div class="show-more-less-html__markup"><p>Build <strong>APIs</strong>.</p></div>
</div>
</body>
</html>
"""


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSleep:
    """asyncio.sleep stand-in that advances a FakeClock instead of waiting."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.calls = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.clock.advance(seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_sleep(clock: FakeClock) -> FakeSleep:
    return FakeSleep(clock)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment, with pacing disabled."""
    return Settings(
        _env_file=None,
        browserless_token="test-token",
        min_request_interval_s=0,
    )


@pytest.fixture
def listing_html() -> str:
    return LISTING_HTML


@pytest.fixture
def similar_jobs_html() -> str:
    return SIMILAR_JOBS_HTML


@pytest.fixture
def detail_html() -> str:
    return DETAIL_HTML
