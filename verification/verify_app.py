from playwright.sync_api import sync_playwright, expect

def verify_app(page):
    print("Navigating to app...")
    page.goto("http://localhost:8501")

    # Wait for the sidebar to render, which indicates the app has initialized.
    print("Waiting for app to load...")
    expect(page.get_by_text("Control Panel")).to_be_visible(timeout=20000)
    expect(page.get_by_text("WAFER-001").first).to_be_visible()

    print("Starting scan...")
    page.get_by_role("button", name="Start Scan").click()

    # Default timing: 1.25s of ticks plus a 0.5s reveal delay.
    print("Waiting for defects to be revealed...")
    expect(page.get_by_text("Metal Particle").first).to_be_visible(timeout=15000)
    expect(page.get_by_text("96.5%").first).to_be_visible()
    page.screenshot(path="verification/scan_complete.png")

    print("Advancing to next wafer...")
    page.get_by_role("button", name="Next Wafer").click()
    expect(page.get_by_text("WAFER-002").first).to_be_visible(timeout=10000)
    expect(page.get_by_text("No defects detected")).to_be_visible()

    page.screenshot(path="verification/app_verification.png")
    print("Screenshots saved.")

if __name__ == "__main__":
    with sync_playwright() as p:
        browser = p.chromium.launch(headless=True)
        page = browser.new_page()
        try:
            verify_app(page)
        except Exception as e:
            print(f"Error: {e}")
            page.screenshot(path="verification/error_screenshot.png")
        finally:
            browser.close()
