"""
Post reports
"""

import logging
from uuid import UUID

from fastapi import status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.post import Post
from app.models.reports import Report
from app.schemas.auth import AuthUser
from app.schemas.reports import ReportCreate
from app.core.email import send_report_email
from app.core.exceptions import CustomHTTPException
from app.core.error_codes import POST_NOT_FOUND, REPORT_SUBMISSION_ERROR

logger = logging.getLogger(__name__)


async def create_report(
    db: AsyncSession,
    post_id: UUID,
    reporter: AuthUser,
    data: ReportCreate
) -> Report:
    """Store the report, then let moderators know by email"""
    post = await db.get(Post, post_id)
    if not post:
        raise CustomHTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found",
            error_code=POST_NOT_FOUND
        )

    report = Report(post_id=post_id, reporter_id=reporter.id, reason=data.reason)
    try:
        db.add(report)
        await db.commit()
        await db.refresh(report)
    except Exception as e:
        await db.rollback()
        logger.error(f"Failed to store report for post {post_id}: {str(e)}")
        raise CustomHTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit report. Please try again.",
            error_code=REPORT_SUBMISSION_ERROR
        )

    logger.info(f"Post {post_id} reported by {reporter.id}")
    await send_report_email(str(post_id), post.title, data.reason, reporter.email)
    return report
