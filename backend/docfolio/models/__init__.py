from .page import Page
from .section import Section
from .portfolio_content import PortfolioContent
from .user import User, RevokedToken
