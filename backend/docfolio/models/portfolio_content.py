from docfolio.extensions import db
from .base import BaseModel

SOCIAL_LINK_FIELDS = (
    "github_url",
    "linkedin_url",
    "twitter_url",
    "email",
    "google_scholar_url",
    "stackoverflow_url",
    "orcid_url",
    "medium_url",
    "gumroad_url",
    "substack_url",
    "dev_to_url",
    "hashnode_url",
    "youtube_url",
    "personal_website_url",
    "facebook_url",
    "instagram_url",
    "tiktok_url",
    "vk_url",
)

# Bilingual text fields, each paired with a `<name>_native` column
LOCALIZED_FIELDS = (
    "name",
    "title",
    "bio",
    "featured_projects_title",
    "contact_title",
    "contact_text",
    "portfolio_label",
    "native_language_label",
    "quick_stats_title",
)

DEFAULTS = {
    "featured_projects_title": "Featured Projects",
    "featured_projects_title_native": "Ընտրված նախագծեր",
    "contact_title": "Let's Work Together",
    "contact_title_native": "Եկեք աշխատենք միասին",
    "contact_text": (
        "I'm always interested in hearing about new projects and opportunities. "
        "Whether you have a question or just want to say hi, feel free to reach out!"
    ),
    "contact_text_native": (
        "Ես միշտ հետաքրքրված եմ նոր նախագծերի և հնարավորությունների մասին լսելով: "
        "Անկախ նրանից, թե հարց ունեք, թե պարզապես ցանկանում եք բարևել, "
        "ազատ զգացեք կապվել ինձ հետ:"
    ),
    "portfolio_label": "Portfolio",
    "portfolio_label_native": "Պորտֆել",
    "native_language_label": "Native",
    "native_language_label_native": "հայերեն",
    "quick_stats_title": "Quick Stats",
    "quick_stats_title_native": "Արագ վիճակագրություն",
}


class PortfolioContent(BaseModel):
    __tablename__ = "portfolio_content"

    image_url = db.Column(db.String(512), nullable=True)

    name = db.Column(db.String(200), nullable=True)
    name_native = db.Column(db.String(200), nullable=True)
    title = db.Column(db.String(200), nullable=True)
    title_native = db.Column(db.String(200), nullable=True)
    bio = db.Column(db.Text, nullable=True)
    bio_native = db.Column(db.Text, nullable=True)

    github_url = db.Column(db.String(512), nullable=True)
    linkedin_url = db.Column(db.String(512), nullable=True)
    twitter_url = db.Column(db.String(512), nullable=True)
    email = db.Column(db.String(200), nullable=True)
    google_scholar_url = db.Column(db.String(512), nullable=True)
    stackoverflow_url = db.Column(db.String(512), nullable=True)
    orcid_url = db.Column(db.String(512), nullable=True)
    medium_url = db.Column(db.String(512), nullable=True)
    gumroad_url = db.Column(db.String(512), nullable=True)
    substack_url = db.Column(db.String(512), nullable=True)
    dev_to_url = db.Column(db.String(512), nullable=True)
    hashnode_url = db.Column(db.String(512), nullable=True)
    youtube_url = db.Column(db.String(512), nullable=True)
    personal_website_url = db.Column(db.String(512), nullable=True)
    facebook_url = db.Column(db.String(512), nullable=True)
    instagram_url = db.Column(db.String(512), nullable=True)
    tiktok_url = db.Column(db.String(512), nullable=True)
    vk_url = db.Column(db.String(512), nullable=True)

    years_of_experience = db.Column(db.Integer, nullable=False, default=0)

    featured_projects_title = db.Column(db.String(200), nullable=True)
    featured_projects_title_native = db.Column(db.String(200), nullable=True)
    contact_title = db.Column(db.String(200), nullable=True)
    contact_title_native = db.Column(db.String(200), nullable=True)
    contact_text = db.Column(db.Text, nullable=True)
    contact_text_native = db.Column(db.Text, nullable=True)

    portfolio_label = db.Column(db.String(100), nullable=True)
    portfolio_label_native = db.Column(db.String(100), nullable=True)
    native_language_label = db.Column(db.String(100), nullable=True)
    native_language_label_native = db.Column(db.String(100), nullable=True)

    quick_stats_title = db.Column(db.String(200), nullable=True)
    quick_stats_title_native = db.Column(db.String(200), nullable=True)
    quick_stats = db.Column(db.JSON, nullable=False, default=list)
