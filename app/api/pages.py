"""
Page level endpoints: the homepage feed and the static About, Contact and
Collaborate pages.
"""

from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_db
from app.schemas.auth import AuthUser
from app.schemas.enums import FeedScope
from app.schemas.pages import HomePage, PageSection, StaticPage
from app.crud.post import load_feed
from app.core.config import settings
from app.core.security import get_current_user

router = APIRouter(prefix="/pages", tags=["pages"])


ABOUT_PAGE = StaticPage(
    title="About Our Platform",
    intro=(
        "Created by Rehan and Company, we're building the future of anonymous "
        "knowledge sharing and community-driven learning."
    ),
    sections=[
        PageSection(
            heading="Our Mission",
            body=(
                "We believe that everyone has valuable knowledge to share and important "
                "questions to ask. Our platform removes barriers by allowing completely "
                "anonymous participation, creating a safe space where curiosity can "
                "flourish without judgment."
            ),
        ),
        PageSection(
            heading="Anonymous & Safe",
            body="Ask questions and share knowledge without revealing your identity. Your privacy is our priority.",
        ),
        PageSection(
            heading="Rich Discussions",
            body="Engage in meaningful conversations with helpful voting and content sharing across various topics.",
        ),
        PageSection(
            heading="Community Driven",
            body="Built by the community, for the community. Every voice matters and contributes to our collective knowledge base.",
        ),
        PageSection(
            heading="Instant Access",
            body="Start asking, answering, and learning immediately.",
        ),
        PageSection(
            heading="Rehan and Company",
            body=(
                "We're passionate about creating platforms that empower people to learn, "
                "share, and grow together. Our commitment to privacy, accessibility, and "
                "community-driven content makes us unique in the digital landscape."
            ),
        ),
    ],
)


CONTACT_PAGE = StaticPage(
    title="Get In Touch",
    intro=(
        "Have questions, suggestions, or need support? We'd love to hear from you. "
        "Send us a message and we'll respond as soon as possible."
    ),
    sections=[
        PageSection(
            heading="Why Contact Us?",
            items=[
                "General Inquiries: Questions about our platform, features, or how to get started.",
                "Reports & Issues: Report content issues, technical problems, or inappropriate behavior.",
                "Feedback & Suggestions: Help us improve by sharing your ideas and feedback.",
            ],
        ),
        PageSection(
            heading="Response Time",
            body=(
                "We typically respond to all inquiries within 24-48 hours. "
                'For urgent matters, please mark your subject line with "URGENT".'
            ),
            items=[
                "Business Hours: Monday - Friday, 9 AM - 6 PM (GMT)",
                "Emergency Support: Available 24/7 for critical issues",
            ],
        ),
    ],
)


def collaborate_page() -> StaticPage:
    return StaticPage(
        title="Let's Build Together",
        intro=(
            "Join our open-source community and help make this platform even better. "
            "Every contribution, big or small, makes a difference!"
        ),
        sections=[
            PageSection(
                heading="Code Contributions",
                items=[
                    "Fix bugs and improve performance",
                    "Add new features and enhancements",
                    "Improve mobile responsiveness",
                    "Enhance accessibility features",
                ],
            ),
            PageSection(
                heading="Ideas & Feedback",
                items=[
                    "Suggest new features and improvements",
                    "Report bugs and usability issues",
                    "Share design mockups and wireframes",
                    "Provide user experience feedback",
                ],
            ),
            PageSection(
                heading="Community Support",
                items=[
                    "Help other users with questions",
                    "Moderate content and report issues",
                    "Write documentation and tutorials",
                    "Share the platform with others",
                ],
            ),
            PageSection(
                heading="Ready to Contribute?",
                body=(
                    "Whether you're a seasoned developer or just getting started, there's a "
                    "place for you in our community. Let's build something amazing together!"
                ),
            ),
        ],
        links={"repository": str(settings.REPOSITORY_URL)},
    )


@router.get("/home", response_model=HomePage)
async def homepage(
    db: AsyncSession = Depends(get_db),
    current_user: Optional[AuthUser] = Depends(get_current_user)
):
    feed = await load_feed(db, current_user, FeedScope.ALL, limit=settings.HOMEPAGE_POST_LIMIT)
    return HomePage(
        title="Ask Anything, Share Everything",
        intro=(
            "A place where curiosity meets knowledge. Ask questions, share insights, "
            "and connect with others - all completely anonymous."
        ),
        feed=feed,
    )


@router.get("/about", response_model=StaticPage)
async def about_page():
    return ABOUT_PAGE


@router.get("/contact", response_model=StaticPage)
async def contact_page():
    return CONTACT_PAGE


@router.get("/collaborate", response_model=StaticPage)
async def collaborate():
    return collaborate_page()
