from .methodology_item import MethodologyItem
from .profile import Profile
from .project import Project
from .revoked_token import RevokedToken
from .section import PortfolioSection
from .skill import Skill
from .user import User
