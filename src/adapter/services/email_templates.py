from datetime import datetime

_FRAME = """\
<div style="font-family: Arial, sans-serif; background-color: #f4f4f4; padding: 40px 20px;">
  <div style="max-width: 600px; margin: auto; background-color: #ffffff; padding: 30px;
              border-radius: 8px; box-shadow: 0 4px 12px rgba(0, 0, 0, 0.1);">
    <h2 style="color: #e30613;">{title}</h2>
    {body}
    <p style="font-size: 14px; color: #777777">
      If you didn't request this, you can safely ignore this email.
    </p>
    <hr style="margin: 30px 0; border: none; border-top: 1px solid #dddddd" />
    <p style="font-size: 12px; color: #aaaaaa; text-align: center">
      &copy; {year} {app_name}. All rights reserved.
    </p>
  </div>
</div>
"""

_TEXT = """\
Hello,

{title}
{body}

If you didn't request this, you can safely ignore this email.

Thank you
(c) {year} {app_name}. All rights reserved.
"""


def otp_email(app_name: str, otp: str) -> tuple[str, str, str]:
    """Subject, HTML and text bodies for an email verification code"""
    title = "Verify your email"
    year = datetime.now().year
    html = _FRAME.format(
        title=title,
        body=(
            '<p style="font-size: 16px; color: #333333">'
            "Please use this otp to verify your account</p>"
            '<h1 style="color: #e30613; text-align: center; letter-spacing: 5px">'
            f"{otp}</h1>"
        ),
        year=year,
        app_name=app_name,
    )
    text = _TEXT.format(
        title=title,
        body=f"Please use this otp to verify your account: {otp}",
        year=year,
        app_name=app_name,
    )
    return f"[{app_name}] {title}", html, text


def reset_link_email(app_name: str, url: str) -> tuple[str, str, str]:
    """Subject, HTML and text bodies for a password reset link"""
    title = "Reset your password"
    year = datetime.now().year
    html = _FRAME.format(
        title=title,
        body=(
            '<p style="font-size: 16px; color: #333333">'
            "Click on the link below to reset your password</p>"
            f'<a href="{url}" style="color: #e30613; text-align: center;">Reset Password</a>'
        ),
        year=year,
        app_name=app_name,
    )
    text = _TEXT.format(
        title=title,
        body=f"Click on the link below to reset your password: {url}",
        year=year,
        app_name=app_name,
    )
    return f"[{app_name}] {title}", html, text
