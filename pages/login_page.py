from playwright.async_api import Page

from pages.base_page import BasePage
from utils.error_handler import handle_error


class LoginPage(BasePage):

    def __init__(self, page: Page):
        super().__init__(page)
        self.username_input = page.locator("input[name='username']")
        self.password_input = page.locator("input[name='password']")
        self.login_button = page.locator("//button[contains(., 'Login')]")
        self.error_message = page.locator("//div[@role='alert']")
        self.company_logo = page.locator("img[alt='company-branding']")

    async def is_company_logo_present(self) -> None:
        await self.verify_element_visible(self.company_logo, "Company Logo")

    async def fill_username(self, username: str) -> None:
        await self.fill_element(self.username_input, username, "Username")

    async def fill_password(self, password: str) -> None:
        await self.fill_element(self.password_input, password, "Password")

    async def click_login_button(self) -> None:
        await self.click_element(self.login_button, "Login Button")

    async def is_error_message_visible(self) -> None:
        await self.verify_element_visible(self.error_message, "Error Message")

    async def is_error_message_not_visible(self) -> None:
        await self.verify_element_not_visible(self.error_message, "Error Message")

    async def login_to_application(self, username: str, password: str) -> None:
        try:
            await self.fill_username(username)
            await self.fill_password(password)
            await self.click_login_button()
        except Exception as e:
            handle_error(e, "login_to_application", "Failed to login to Application")
            raise
