from .user import User
from .brand_profile import BrandProfile
from .job import BackgroundJob, JobStatus, JobType
from .asset import BrandAsset
from .brand_name import BrandName
from .social_post import SocialPost
from .analytics import ContentPost, PostMetric, SocialAccount
from .slogan import Slogan
