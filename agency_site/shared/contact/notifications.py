"""E-mail notification for new contact submissions."""

import os
import smtplib
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart


def send_submission_notification(submission_id: str, data: dict) -> bool:
    """
    Notify the agency inbox about a stored submission using SMTP.

    Runs after the response is sent; failures are logged and never reach the client.
    Returns False when SMTP is not configured or sending fails.
    """
    smtp_user = os.environ.get("SMTP_USER")
    smtp_password = os.environ.get("SMTP_PASSWORD")
    notify_email = os.environ.get("CONTACT_NOTIFY_EMAIL")

    if not smtp_user or not smtp_password or not notify_email:
        logging.info("Contact notification skipped: SMTP not configured")
        return False

    try:
        smtp_host = os.environ.get("SMTP_HOST", "smtp.gmail.com")
        smtp_port = int(os.environ.get("SMTP_PORT", "587"))

        msg = MIMEMultipart()
        msg['From'] = smtp_user
        msg['To'] = notify_email
        msg['Reply-To'] = data["email"]  # Allow the team to reply directly
        msg['Subject'] = f"Contact Form: {data.get('subject') or data['name']}"

        body = f"""
New contact form submission ({data['locale']}):

Name: {data['name']}
Email: {data['email']}
Phone: {data.get('phone') or '-'}
Company: {data.get('company') or '-'}
Subject: {data.get('subject') or '-'}

Message:
{data['message']}

---
Submission ID: {submission_id}
"""

        msg.attach(MIMEText(body, 'plain'))

        with smtplib.SMTP(smtp_host, smtp_port) as server:
            server.starttls()
            server.login(smtp_user, smtp_password)
            server.send_message(msg)

        logging.info(f"Contact notification sent for submission {submission_id}")
        return True

    except Exception as e:
        logging.error(f"Failed to send contact notification: {str(e)}", exc_info=True)
        return False
