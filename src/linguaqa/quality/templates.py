"""Plain-text e-mail templates for review and escalation notices."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from linguaqa.models.notifications import NotificationIntent
from linguaqa.models.quality import Freelancer, QualityReport

DEFAULT_SIGNATURE = "el turco Quality Management"


def _score(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:g}"


def _project(report: QualityReport) -> str:
    return report.project_name or "Not specified"


def _report_link(app_url: str, report_id: str) -> str:
    if not app_url:
        return "(Access via Dashboard)"
    return f"{app_url.rstrip('/')}/QualityReportDetail?id={report_id}"


def review_required(
    freelancer: Freelancer,
    report: QualityReport,
    deadline: datetime,
    dispute_period_days: int,
    auto_accept: bool,
    signature: str = DEFAULT_SIGNATURE,
) -> NotificationIntent:
    lines = [
        f"Dear {freelancer.full_name},",
        "",
        "A quality assessment report has been created for you and is awaiting your review.",
        "",
        f"Project: {_project(report)}",
        f"Report Type: {report.report_type}",
        f"LQA Score: {_score(report.lqa_score)}",
        f"QS Score: {_score(report.qs_score)}",
        "",
        "Reviewer Comments:",
        report.reviewer_comments or "No comments",
        "",
        f"You have {dispute_period_days} days to accept or dispute this report.",
        f"Deadline: {deadline.strftime('%m/%d/%Y')}",
    ]
    if auto_accept:
        lines += ["", "If no response is received within this period, the report will be automatically accepted."]
    lines += ["", "Best regards,", signature]
    return NotificationIntent(
        to=freelancer.email,
        subject="[Review Required] Quality Assessment Report",
        body="\n".join(lines),
    )


def dispute_notice(
    recipient_email: str,
    freelancer_name: str,
    report: QualityReport,
    comment: str,
    app_url: str = "",
) -> NotificationIntent:
    body = "\n".join([
        "A quality report has been disputed and requires your review.",
        "",
        f"Translator: {freelancer_name}",
        f"Project: {_project(report)}",
        f"Report Type: {report.report_type}",
        f"LQA Score: {_score(report.lqa_score)}",
        f"QS Score: {_score(report.qs_score)}",
        "",
        "Translator's Dispute:",
        comment,
        "",
        "Reviewer Comments:",
        report.reviewer_comments or "No comments",
        "",
        "Please review the report and provide your final decision.",
        "",
        f"Report Link: {_report_link(app_url, report.id)}",
    ])
    return NotificationIntent(
        to=recipient_email,
        subject=f"[Dispute Notice] LQA Report Disputed - {freelancer_name}",
        body=body,
    )


def reviewer_dispute_notice(
    reviewer_email: str,
    freelancer_name: str,
    report: QualityReport,
    comment: str,
) -> NotificationIntent:
    body = "\n".join([
        "Your quality report has been disputed by the translator.",
        "",
        f"Translator: {freelancer_name}",
        f"Project: {_project(report)}",
        "",
        "Translator's Dispute:",
        comment,
        "",
        "The report has been assigned to senior PMs for review.",
    ])
    return NotificationIntent(
        to=reviewer_email,
        subject="[Notice] Your Report Has Been Disputed",
        body=body,
    )


def final_decision(
    freelancer: Freelancer,
    report: QualityReport,
    comment: str,
    signature: str = DEFAULT_SIGNATURE,
) -> NotificationIntent:
    lines = [
        f"Dear {freelancer.full_name},",
        "",
        "Your disputed quality report has been reviewed and a final decision has been made.",
        "",
        f"Project: {_project(report)}",
    ]
    if report.lqa_score is not None:
        lines.append(f"LQA Score: {_score(report.lqa_score)}")
    if report.qs_score is not None:
        lines.append(f"QS Score: {_score(report.qs_score)}")
    lines += [
        "",
        "Final Assessment:",
        comment or "No comments provided",
        "",
        "If you have any questions, please contact our quality management team.",
        "",
        "Best regards,",
        signature,
    ]
    return NotificationIntent(
        to=freelancer.email,
        subject="[Final Decision] Quality Report Finalized",
        body="\n".join(lines),
    )


def auto_accepted(
    freelancer: Freelancer,
    report: QualityReport,
    signature: str = DEFAULT_SIGNATURE,
) -> NotificationIntent:
    body = "\n".join([
        f"Dear {freelancer.full_name},",
        "",
        "The review period for the following quality report has ended without a response,",
        "so the report has been automatically accepted.",
        "",
        f"Project: {_project(report)}",
        f"LQA Score: {_score(report.lqa_score)}",
        f"QS Score: {_score(report.qs_score)}",
        "",
        "Best regards,",
        signature,
    ])
    return NotificationIntent(
        to=freelancer.email,
        subject="[Auto-Accepted] Quality Assessment Report",
        body=body,
    )


def low_score_freelancer(
    freelancer: Freelancer,
    combined: float,
    threshold: float,
    signature: str = DEFAULT_SIGNATURE,
) -> NotificationIntent:
    body = "\n".join([
        f"Dear {freelancer.full_name},",
        "",
        f"Based on your quality assessments, your Combined Score has been calculated as {combined:.1f}.",
        f"This score is below the established threshold ({threshold:g}).",
        "",
        "To improve your quality performance:",
        "- Review our translation quality guidelines",
        "- Examine the feedback from previous LQA reports",
        "- Ensure compliance with terminology and style guides",
        "",
        "If you have any questions, please contact our quality management team.",
        "",
        "Best regards,",
        signature,
    ])
    return NotificationIntent(
        to=freelancer.email,
        subject=f"Quality Warning - Combined Score: {combined:.1f}",
        body=body,
    )


def low_score_admin(
    admin_email: str,
    freelancer: Freelancer,
    combined: float,
    threshold: float,
    total_assessments: int,
) -> NotificationIntent:
    body = "\n".join([
        f"Quality warning for {freelancer.full_name}:",
        "",
        f"Combined Score: {combined:.1f}",
        f"Probation Threshold: {threshold:g}",
        f"Total Assessments: {total_assessments}",
        "",
        "Please contact the freelancer and create a quality improvement plan.",
    ])
    return NotificationIntent(
        to=admin_email,
        subject=f"[Admin Notice] Low Quality Score: {freelancer.full_name}",
        body=body,
    )


def consecutive_low_lqa(
    freelancer: Freelancer,
    scores: Sequence[float],
    signature: str = DEFAULT_SIGNATURE,
) -> NotificationIntent:
    listing = "\n".join(f"{i}. LQA: {_score(s)}" for i, s in enumerate(scores, start=1))
    body = "\n".join([
        f"Dear {freelancer.full_name},",
        "",
        f"You have received low scores in your last {len(scores)} LQA assessments:",
        listing,
        "",
        "This is a serious warning regarding our quality standards.",
        "Please contact our quality management team as soon as possible.",
        "",
        "Best regards,",
        signature,
    ])
    return NotificationIntent(
        to=freelancer.email,
        subject="Urgent Quality Warning - Consecutive Low LQA Scores",
        body=body,
    )
