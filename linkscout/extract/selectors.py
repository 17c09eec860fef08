"""LinkedIn guest-page selectors with fallbacks.

Each tuple is ordered newest markup variant first, legacy last; callers try
them in order until one yields a value.
"""

# --- Listing page: job cards ---
CARD_SELECTORS: tuple[str, ...] = (
    ".base-card.main-job-card",
    '.base-card[data-entity-urn*="jobPosting"]',
    ".job-search-card",
    ".base-main-card",
)

CARD_TITLE_SELECTORS: tuple[str, ...] = (
    "h3.base-main-card__title",
    "h3.base-search-card__title",
    ".main-job-card__title",
)
CARD_TITLE_FALLBACK: tuple[str, ...] = ('a[data-tracking-control-name*="job"] span',)

CARD_COMPANY_SELECTORS: tuple[str, ...] = (
    "h4.base-main-card__subtitle a",
    "h4.base-search-card__subtitle a",
    ".main-job-card__company",
)
CARD_COMPANY_FALLBACK: tuple[str, ...] = ('a[data-tracking-control-name*="company"]',)

CARD_LINK_SELECTORS: tuple[str, ...] = (
    "a.base-card__full-link",
    'a[href*="/jobs/view/"]',
)

CARD_LOCATION_SELECTORS: tuple[str, ...] = (
    ".main-job-card__location",
    ".job-search-card__location",
    ".base-main-card__metadata span",
)

CARD_POSTED_SELECTORS: tuple[str, ...] = (
    "time.main-job-card__listdate",
    "time.job-search-card__listdate",
    "time",
)

CARD_SALARY_SELECTORS: tuple[str, ...] = (
    ".main-job-card__salary-info",
    ".job-search-card__salary-info",
    ".salary",
)

CARD_JOB_TYPE_SELECTORS: tuple[str, ...] = (
    ".job-posting-benefits__text",
    ".main-job-card__job-type",
)

CARD_SNIPPET_SELECTORS: tuple[str, ...] = (
    ".job-search-card__snippet",
    ".base-search-card__snippet",
    ".main-job-card__snippet",
)

# --- Listing page: result count header ---
TOTAL_RESULTS_SELECTORS: tuple[str, ...] = (
    ".results-context-header__job-count",
    ".jobs-search-results-list__subtitle",
    ".search-results__total",
)

# --- Listing page: "similar jobs" block shown when the search is empty ---
SIMILAR_CARD_SELECTOR = '.base-card[data-tracking-control-name="public_jobs_similar-jobs"]'
SIMILAR_TITLE_SELECTORS: tuple[str, ...] = ("h3.base-main-card__title", ".sr-only")
SIMILAR_COMPANY_SELECTORS: tuple[str, ...] = ("h4.base-main-card__subtitle a",)
SIMILAR_LINK_SELECTORS: tuple[str, ...] = ("a.base-card__full-link",)
SIMILAR_LOCATION_SELECTORS: tuple[str, ...] = (".main-job-card__location",)
SIMILAR_SALARY_SELECTORS: tuple[str, ...] = (".main-job-card__salary-info",)
SIMILAR_POSTED_SELECTORS: tuple[str, ...] = ("time.main-job-card__listdate",)

# --- Detail page ---
DETAIL_TITLE_SELECTORS: tuple[str, ...] = (
    ".topcard__title",
    'h1[data-test-id="job-title"]',
)
DETAIL_COMPANY_SELECTORS: tuple[str, ...] = (
    ".topcard__org-name-link",
    ".sub-nav-cta__optional-url",
)
DETAIL_LOCATION_SELECTORS: tuple[str, ...] = (
    ".topcard__flavor--bullet",
    ".sub-nav-cta__meta-text",
)
DETAIL_SALARY_SELECTORS: tuple[str, ...] = (
    ".compensation__salary",
    ".salary",
)
DETAIL_DESCRIPTION_SELECTORS: tuple[str, ...] = (
    ".show-more-less-html__markup",
    ".description__text",
    ".job-description",
)
DETAIL_POSTED_SELECTORS: tuple[str, ...] = (".posted-time-ago__text",)
DETAIL_APPLICANTS_SELECTORS: tuple[str, ...] = (".num-applicants__caption",)
CANONICAL_LINK_SELECTORS: tuple[str, ...] = ('link[rel="canonical"]',)

# Suffix LinkedIn appends to <title>
TITLE_SITE_SUFFIX = r"\s*\|\s*LinkedIn$"
# og:title reads "<Company> hiring <Title> in <Location>"
OG_TITLE_SEPARATOR = " hiring "

# --- Browser waits ---
CONTENT_MARKERS = ".base-card, .job-search-card, .main-job-card"
COOKIE_ACCEPT_SELECTOR = 'button[aria-label*="Accept"], button[data-tracking-control-name*="guest"]'
