"""HTML wrapper shared by the order emails."""

from html import escape

STORE_NAME = "Vasstra Fashion"

_PAGE = """<!DOCTYPE html>
<html>
<head>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; background-color: #f9f7f4; }}
    .header {{ background-color: #7a2139; color: white; padding: 20px; text-align: center; border-radius: 5px; }}
    .content {{ background-color: white; padding: 20px; margin: 20px 0; border-radius: 5px; }}
    .footer {{ text-align: center; color: #666; font-size: 12px; padding: 10px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>{heading}</h1></div>
    <div class="content">
{content}
    </div>
    <div class="footer"><p>{store}. This is an automated email, please do not reply.</p></div>
  </div>
</body>
</html>
"""


def html_email(heading: str, paragraphs: list[str], items: list[str] | None = None) -> str:
    """Render plain-text paragraphs (and an optional item list) as an HTML page.

    All text is escaped, so buyer-supplied names and product names are safe
    to pass through.
    """
    blocks = [f"      <p>{escape(paragraph)}</p>" for paragraph in paragraphs]
    if items:
        rows = "".join(f"<li>{escape(item)}</li>" for item in items)
        blocks.insert(1, f"      <ul>{rows}</ul>")
    return _PAGE.format(heading=escape(heading), content="\n".join(blocks), store=escape(STORE_NAME))
