app_name = "dual_calendar"
app_title = "Dual Calendar"
app_publisher = "OpenAI"
app_description = "Month calendar showing Gregorian and Jalali dates side by side, with either one as the primary calendar."
app_email = "support@example.com"
app_license = "MIT"

# Assets
app_include_js = [
    "assets/dual_calendar/js/dual_calendar.bundle.js",
]

# Boot
boot_session = "dual_calendar.boot.boot_session"

fixtures = []
