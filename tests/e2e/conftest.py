"""
Fixtures for the Strapi admin panel browser tests.
Options are registered in tests/conftest.py; run with --run-e2e.
"""
import re

import pytest

SIDE_NAV = 'nav[aria-label="Side navigation"]'


@pytest.fixture(scope='session')
def strapi_url(request):
    return request.config.getoption('--strapi-url').rstrip('/')


@pytest.fixture(scope='session')
def admin_url(strapi_url):
    return f"{strapi_url}/admin"


@pytest.fixture(scope='session')
def admin_credentials(request):
    return {
        'email': request.config.getoption('--admin-email'),
        'password': request.config.getoption('--admin-password'),
    }


@pytest.fixture(scope='session')
def playwright():
    """Playwright instance for the test session."""
    from playwright.sync_api import sync_playwright

    with sync_playwright() as p:
        yield p


@pytest.fixture(scope='session')
def browser(playwright, request):
    headed = request.config.getoption('--headed')
    browser = playwright.chromium.launch(headless=not headed, slow_mo=250 if headed else 0)
    print(f"[BROWSER] Launched chromium (headless={not headed})")
    yield browser
    browser.close()


@pytest.fixture(scope='function')
def page(browser):
    context = browser.new_context(viewport={'width': 1920, 'height': 1080})
    context.set_default_timeout(60 * 1000)
    context.set_default_navigation_timeout(60 * 1000)
    page = context.new_page()
    yield page
    context.close()


@pytest.fixture(scope='function')
def admin_page(page, admin_url, admin_credentials):
    """A page logged into the admin panel, with the side navigation loaded."""
    page.goto(admin_url, wait_until='domcontentloaded')

    page.wait_for_selector('input[name="email"]', timeout=30000)
    page.fill('input[name="email"]', admin_credentials['email'])
    page.fill('input[name="password"]', admin_credentials['password'])
    page.click('button[type="submit"]', timeout=30000)

    page.wait_for_url(re.compile(r'/admin'), timeout=60000)
    page.wait_for_selector(f'{SIDE_NAV} >> text="Content Manager"', state='visible', timeout=60000)
    return page


@pytest.fixture
def open_collection(admin_url):
    """Navigate to a collection type's list view through the side navigation."""
    def _open(page, label, uid):
        page.click(f'{SIDE_NAV} >> text="Content Manager"')
        page.click(f'text="{label}"')
        page.wait_for_url(f'**/content-manager/collectionType/{uid}**', timeout=60000)
        return f"{admin_url}/content-manager/collectionType/{uid}"
    return _open
