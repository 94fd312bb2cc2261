from pathlib import Path

from fastapi.templating import Jinja2Templates

from fakebooks.api import components
from fakebooks.core.config import settings
from fakebooks.utils import format_currency, format_date

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["currency"] = format_currency
templates.env.filters["date"] = format_date
templates.env.globals["project_name"] = settings.PROJECT_NAME
templates.env.globals["input_classes"] = components.input_classes
templates.env.globals["submit_button_classes"] = components.submit_button_classes
templates.env.globals["danger_button_classes"] = components.danger_button_classes
templates.env.globals["line_item_classes"] = components.line_item_classes
templates.env.globals["nav_link_classes"] = components.nav_link_classes
