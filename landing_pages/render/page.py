"""Static HTML rendering for location landing pages.

``render_landing_page`` assembles a standalone HTML5 document from smaller
section renderers. Output depends only on its inputs, so equal previews
always render byte-identical markup.
"""

import json
import re
from html import escape
from typing import Any, Dict, Iterable, List, Optional, Sequence

from landing_pages.models import BusinessContent, GenerationRequest, PageImages, PagePreview

ICONS = (
    '<path d="M13 2H6a2 2 0 0 0-2 2v16a2 2 0 0 0 2 2h12a2 2 0 0 0 2-2V9z"></path><polyline points="13 2 13 9 20 9"></polyline>',
    '<circle cx="12" cy="12" r="10"></circle><path d="M12 6v6l4 2"></path>',
    '<path d="M21 16V8a2 2 0 0 0-1-1.73l-7-4a2 2 0 0 0-2 0l-7 4A2 2 0 0 0 3 8v8a2 2 0 0 0 1 1.73l7 4a2 2 0 0 0 2 0l7-4A2 2 0 0 0 21 16z"></path>',
    '<circle cx="12" cy="12" r="3"></circle><path d="M19.4 15a1.65 1.65 0 0 0 .33 1.82l.06.06a2 2 0 0 1 0 2.83 2 2 0 0 1-2.83 0l-.06-.06a1.65 1.65 0 0 0-1.82-.33 1.65 1.65 0 0 0-1 1.51V21a2 2 0 0 1-4 0v-.09A1.65 1.65 0 0 0 9 19.4a1.65 1.65 0 0 0-1.82.33l-.06.06a2 2 0 0 1-2.83-2.83l.06-.06a1.65 1.65 0 0 0 .33-1.82 1.65 1.65 0 0 0-1.51-1H3a2 2 0 0 1 0-4h.09A1.65 1.65 0 0 0 4.6 9a1.65 1.65 0 0 0-.33-1.82l-.06-.06a2 2 0 0 1 2.83-2.83l.06.06a1.65 1.65 0 0 0 1.82.33H9a1.65 1.65 0 0 0 1-1.51V3a2 2 0 0 1 4 0v.09a1.65 1.65 0 0 0 1 1.51 1.65 1.65 0 0 0 1.82-.33l.06-.06a2 2 0 0 1 2.83 2.83l-.06.06a1.65 1.65 0 0 0-.33 1.82V9a1.65 1.65 0 0 0 1.51 1H21a2 2 0 0 1 0 4h-.09a1.65 1.65 0 0 0-1.51 1z"></path>',
    '<path d="M4 15s1-1 4-1 5 2 8 2 4-1 4-1V3s-1 1-4 1-5-2-8-2-4 1-4 1z"></path><line x1="4" y1="22" x2="4" y2="15"></line>',
    '<path d="M21 11.5a8.38 8.38 0 0 1-.9 3.8 8.5 8.5 0 0 1-7.6 4.7 8.38 8.38 0 0 1-3.8-.9L3 21l1.9-5.7a8.38 8.38 0 0 1-.9-3.8 8.5 8.5 0 0 1 4.7-7.6 8.38 8.38 0 0 1 3.8-.9h.5a8.48 8.48 0 0 1 8 8v.5z"></path>',
)

# Feature bullets per service, matched on the exact service name.
SERVICE_FEATURES: Dict[str, Sequence[str]] = {
    "Vitrectomy Recovery Chair Rental": (
        "Ergonomic Design",
        "Adjustable Positioning",
        "Memory Foam Padding",
        "Easy Assembly",
    ),
    "Face-Down Support Cushions & Pillows": (
        "Pressure Relief",
        "Cooling Technology",
        "Washable Covers",
        "Portable Design",
    ),
    "Adjustable Face-Down Mirrors": (
        "HD Clarity",
        "Flexible Mounting",
        "Anti-Fog Coating",
        "LED Illumination",
    ),
    "Complete Recovery Kits": (
        "All Essential Items",
        "Setup Guide",
        "Support Materials",
        "Care Instructions",
    ),
    "Delivery & Setup Support": (
        "Same-Day Available",
        "Professional Installation",
        "Safety Verification",
        "Usage Training",
    ),
    "Nationwide Rental Service": (
        "Flexible Duration",
        "Insurance Accepted",
        "Express Shipping",
        "Easy Returns",
    ),
}
DEFAULT_SERVICE_FEATURES: Sequence[str] = (
    "Professional Service",
    "Expert Support",
    "24/7 Assistance",
    "Quality Guaranteed",
)

BENEFITS = (
    ("feature1", "Quality Equipment", "Premium recovery equipment designed for optimal healing and comfort."),
    ("feature2", "Expert Support", "24/7 assistance from our experienced medical equipment specialists."),
    ("feature3", "Nationwide Service", "Convenient delivery and setup anywhere in the country."),
)

_CHECK_ICON = '<path d="M20 6L9 17l-5-5"/>'
_STAR_ICON = (
    '<path d="M12 2l3.09 6.26L22 9.27l-5 4.87 1.18 6.88L12 17.77l-6.18 3.25L7 14.14 2 9.27l6.91-1.01L12 2z"/>'
)
_WHITESPACE_RE = re.compile(r"\s+")

STYLES = """
      :root {
        --primary: #A8E6CF;
        --primary-hover: #81C8B6;
        --secondary: #D4F8E8;
        --accent: #F7E9D7;
        --text-heading: #4A4A4A;
        --text-body: #6D6D6D;
        --background: #FFFFFF;
        --spacing-base: 24px;
        --radius: 8px;
        --shadow-sm: 0px 4px 12px rgba(0, 0, 0, 0.1);
        --shadow-lg: 0px 8px 24px rgba(0, 0, 0, 0.15);
      }
      * { margin: 0; padding: 0; box-sizing: border-box; }
      body {
        font-family: 'Poppins', sans-serif;
        color: var(--text-body);
        font-size: 18px;
        line-height: 1.6;
        background: var(--background);
      }
      h1, h2, h3, h4, h5, h6 {
        color: var(--text-heading);
        line-height: 1.2;
        margin-bottom: var(--spacing-base);
      }
      h1 { font-size: 48px; font-weight: 700; }
      h2 { font-size: 32px; font-weight: 600; }
      h3 { font-size: 24px; font-weight: 500; }
      .container { max-width: 1200px; margin: 0 auto; padding: 0 var(--spacing-base); }
      section { padding: calc(var(--spacing-base) * 3) 0; }
      .nav {
        background: var(--background);
        border-bottom: 1px solid var(--secondary);
        position: fixed;
        top: 0;
        left: 0;
        right: 0;
        z-index: 1000;
        padding: calc(var(--spacing-base) * 0.5) 0;
      }
      .nav.scrolled { box-shadow: var(--shadow-sm); }
      .nav-container { display: flex; justify-content: space-between; align-items: center; }
      .nav-menu { display: flex; gap: var(--spacing-base); list-style: none; }
      .nav-link {
        color: var(--text-body);
        text-decoration: none;
        font-weight: 500;
        padding: calc(var(--spacing-base) * 0.25) calc(var(--spacing-base) * 0.5);
        border-radius: var(--radius);
        transition: all 0.3s ease;
      }
      .nav-link:hover { color: var(--primary); background: var(--secondary); }
      .hero {
        background: linear-gradient(135deg, var(--secondary), var(--primary));
        min-height: 100vh;
        display: flex;
        align-items: center;
        padding-top: 80px;
      }
      .hero-content { max-width: 50%; }
      .contact-form {
        background: var(--background);
        padding: calc(var(--spacing-base) * 2);
        border-radius: var(--radius);
        box-shadow: var(--shadow-lg);
        max-width: 500px;
        width: 100%;
      }
      .form-grid { display: grid; grid-template-columns: repeat(2, 1fr); gap: var(--spacing-base); }
      .form-group.full-width { grid-column: span 2; }
      .form-label {
        display: block;
        margin-bottom: calc(var(--spacing-base) * 0.25);
        color: var(--text-heading);
        font-weight: 500;
      }
      .form-input, .form-select, .form-textarea {
        width: 100%;
        padding: calc(var(--spacing-base) * 0.5);
        border: 1px solid var(--primary);
        border-radius: var(--radius);
        font-family: 'Poppins', sans-serif;
      }
      .form-button {
        background: var(--primary);
        color: var(--text-heading);
        border: none;
        padding: calc(var(--spacing-base) * 0.5) var(--spacing-base);
        border-radius: var(--radius);
        font-weight: 600;
        cursor: pointer;
        transition: all 0.3s ease;
        width: 100%;
      }
      .form-button:hover { background: var(--primary-hover); transform: translateY(-2px); }
      .services-grid, .features-grid {
        display: grid;
        grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
        gap: calc(var(--spacing-base) * 2);
        margin-top: calc(var(--spacing-base) * 2);
      }
      .service-card {
        background: var(--background);
        border-radius: var(--radius);
        padding: calc(var(--spacing-base) * 2);
        box-shadow: var(--shadow-sm);
        transition: transform 0.3s ease, box-shadow 0.3s ease;
      }
      .service-card:hover { transform: translateY(-4px); box-shadow: var(--shadow-lg); }
      .about-grid {
        display: grid;
        grid-template-columns: 1fr 1fr;
        gap: calc(var(--spacing-base) * 2);
        align-items: start;
      }
      .about-image img {
        width: 100%;
        height: auto;
        border-radius: var(--radius);
        box-shadow: var(--shadow-lg);
      }
      @media (max-width: 768px) {
        :root { --spacing-base: 16px; }
        h1 { font-size: 36px; }
        h2 { font-size: 28px; }
        h3 { font-size: 20px; }
        .nav-menu { display: none; }
        .hero-content { max-width: 100%; }
        .form-grid { grid-template-columns: 1fr; }
        .about-grid { grid-template-columns: 1fr; }
      }
"""

SCRIPT = """
      const nav = document.querySelector('.nav');
      window.addEventListener('scroll', () => {
        if (window.scrollY > 100) {
          nav.classList.add('scrolled');
        } else {
          nav.classList.remove('scrolled');
        }
      });

      document.querySelectorAll('a[href^="#"]').forEach(anchor => {
        anchor.addEventListener('click', function (e) {
          e.preventDefault();
          const target = document.querySelector(this.getAttribute('href'));
          if (target) {
            const headerOffset = 80;
            const elementPosition = target.getBoundingClientRect().top;
            const offsetPosition = elementPosition + window.pageYOffset - headerOffset;
            window.scrollTo({ top: offsetPosition, behavior: 'smooth' });
          }
        });
      });

      const form = document.querySelector('form');
      const phoneInput = document.querySelector('input[type="tel"]');
      phoneInput.addEventListener('input', (e) => {
        const digits = e.target.value.replace(/\\D/g, '');
        if (digits.length >= 10) {
          const parts = digits.match(/(\\d{3})(\\d{3})(\\d{4})/);
          e.target.value = parts[1] + '-' + parts[2] + '-' + parts[3];
        }
      });
      form.addEventListener('submit', (e) => {
        e.preventDefault();
        alert('Thank you for your interest! We will contact you shortly.');
        form.reset();
      });
"""


def _attr(value: Optional[str]) -> str:
    return escape(value or "", quote=True)


def _service_lines(business: Optional[BusinessContent]) -> List[str]:
    return business.service_lines() if business else []


def page_description(preview: PagePreview) -> str:
    if preview.business and preview.business.description:
        return preview.business.description
    location = preview.location
    return (
        f"Find the best {preview.title}. Professional services tailored to your needs "
        f"in {location.city}, {location.state}."
    )


def service_features(service: str) -> Sequence[str]:
    return SERVICE_FEATURES.get(service, DEFAULT_SERVICE_FEATURES)


def service_option_value(service: str) -> str:
    return _WHITESPACE_RE.sub("-", service.lower())


def build_schema_markup(preview: PagePreview, request: Optional[GenerationRequest] = None) -> Dict[str, Any]:
    location = preview.location
    schema: Dict[str, Any] = {
        "@context": "https://schema.org",
        "@type": "LocalBusiness",
        "name": preview.title,
        "description": page_description(preview),
        "url": f"https://{preview.url}",
        "address": {
            "@type": "PostalAddress",
            "addressLocality": location.city,
            "addressRegion": location.state,
            "addressCountry": "US",
        },
        "geo": {
            "@type": "GeoCoordinates",
            "latitude": str(location.latitude),
            "longitude": str(location.longitude),
        },
    }
    if request is not None:
        schema["areaServed"] = {
            "@type": "GeoCircle",
            "geoMidpoint": schema["geo"],
            "geoRadius": f"{request.radius_miles:g} mi",
        }
    return schema


def render_schema(preview: PagePreview, request: Optional[GenerationRequest] = None) -> str:
    payload = json.dumps(build_schema_markup(preview, request), ensure_ascii=False)
    # keep a "</script>" inside a value from closing the block early
    payload = payload.replace("</", "<\\/")
    return f'    <script type="application/ld+json">\n      {payload}\n    </script>'


def render_head(preview: PagePreview) -> str:
    title = _attr(preview.title)
    description = _attr(page_description(preview))
    canonical = _attr(f"https://{preview.url}")
    hero = _attr(preview.images.hero if preview.images else "")
    keywords = ""
    if preview.seo and preview.seo.keywords:
        keywords = f'\n    <meta name="keywords" content="{_attr(", ".join(preview.seo.keywords))}">'
    return f"""<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} | Professional Services</title>
    <meta name="description" content="{description}">{keywords}
    <meta name="robots" content="index, follow">
    <link rel="canonical" href="{canonical}">
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family=Poppins:wght@400;500;600;700&display=swap" rel="stylesheet">

    <meta property="og:title" content="{title}">
    <meta property="og:description" content="{description}">
    <meta property="og:url" content="{canonical}">
    <meta property="og:type" content="website">
    <meta property="og:image" content="{hero}">

    <meta name="twitter:card" content="summary_large_image">
    <meta name="twitter:title" content="{title}">
    <meta name="twitter:description" content="{description}">
    <meta name="twitter:image" content="{hero}">

    <style>{STYLES}    </style>
</head>"""


def render_nav(preview: PagePreview) -> str:
    logo = ""
    if preview.logo_url:
        logo = f'<img src="{_attr(preview.logo_url)}" alt="{_attr(preview.title)}" style="height: 40px; width: auto;" />'
    return f"""    <nav class="nav">
      <div class="container nav-container">
        <a href="#" class="nav-logo">{logo}</a>
        <ul class="nav-menu">
          <li><a href="#services" class="nav-link">Services</a></li>
          <li><a href="#features" class="nav-link">Benefits</a></li>
          <li><a href="#about" class="nav-link">About</a></li>
          <li><a href="#contact" class="nav-link">Contact</a></li>
        </ul>
      </div>
    </nav>"""


def render_contact_form(services: Iterable[str]) -> str:
    options = "".join(
        f'<option value="{_attr(service_option_value(service))}">{escape(service)}</option>' for service in services
    )
    return f"""          <div class="contact-form" id="contact">
            <h2 class="text-2xl font-bold mb-6">Get Started Today</h2>
            <form class="space-y-6">
              <div class="form-grid">
                <div class="form-group">
                  <label class="form-label">Full Name *</label>
                  <input type="text" class="form-input" required />
                </div>
                <div class="form-group">
                  <label class="form-label">Phone *</label>
                  <input type="tel" class="form-input" pattern="[0-9]{{3}}-[0-9]{{3}}-[0-9]{{4}}" placeholder="123-456-7890" required />
                </div>
                <div class="form-group">
                  <label class="form-label">Email *</label>
                  <input type="email" class="form-input" required />
                </div>
                <div class="form-group">
                  <label class="form-label">Service Needed</label>
                  <select class="form-select">{options}</select>
                </div>
                <div class="form-group full-width">
                  <label class="form-label">Message</label>
                  <textarea class="form-textarea" rows="4"></textarea>
                </div>
              </div>
              <button type="submit" class="form-button">Request Information</button>
            </form>
          </div>"""


def render_hero(preview: PagePreview) -> str:
    tagline = ""
    if preview.business and preview.business.unique_value:
        tagline = preview.business.unique_value.split("\n")[0]
    return f"""    <section class="hero" id="home">
      <div class="container">
        <div class="flex items-center gap-8">
          <div class="hero-content">
            <h1>{escape(preview.title)}</h1>
            <p class="text-lg mb-8">{escape(tagline)}</p>
          </div>
{render_contact_form(_service_lines(preview.business))}
        </div>
      </div>
    </section>"""


def render_service_card(service: str, index: int) -> str:
    bullets = "".join(
        f"""
                <li class="flex items-center space-x-2">
                  <svg class="w-5 h-5 text-primary flex-shrink-0" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">{_CHECK_ICON}</svg>
                  <span class="text-gray-600">{escape(feature)}</span>
                </li>"""
        for feature in service_features(service)
    )
    return f"""
        <div class="service-card">
          <div class="icon-wrapper mb-6">
            <div class="rounded-full bg-primary/10 w-16 h-16 flex items-center justify-center mb-4">
              <svg class="w-8 h-8 text-primary" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">{ICONS[index % len(ICONS)]}</svg>
            </div>
          </div>
          <h3 class="text-xl font-semibold mb-4 text-gray-900">{escape(service)}</h3>
          <ul class="space-y-2">{bullets}
          </ul>
          <a href="#contact" class="inline-flex items-center text-primary font-medium">Learn More</a>
        </div>"""


def render_services(business: Optional[BusinessContent]) -> str:
    cards = "".join(render_service_card(service, index) for index, service in enumerate(_service_lines(business)))
    return f"""    <section id="services">
      <div class="container">
        <div class="text-center max-w-3xl mx-auto mb-12">
          <h2>Our Services</h2>
          <p class="text-lg">Comprehensive solutions tailored to your needs. Experience comfort and support every step of the way.</p>
        </div>
        <div class="services-grid">{cards}
        </div>
      </div>
    </section>"""


def render_features(images: Optional[PageImages]) -> str:
    cards = []
    for image_name, heading, text in BENEFITS:
        src = _attr(getattr(images, image_name) if images else None)
        cards.append(
            f"""
          <div class="service-card text-center">
            <img src="{src}" alt="{_attr(heading)}" class="w-16 h-16 mx-auto mb-4" />
            <h3>{escape(heading)}</h3>
            <p>{escape(text)}</p>
          </div>"""
        )
    cards_html = "".join(cards)
    return f"""    <section id="features">
      <div class="container">
        <h2 class="text-center">Key Benefits</h2>
        <div class="features-grid">{cards_html}
        </div>
      </div>
    </section>"""


def render_about(preview: PagePreview) -> str:
    business = preview.business
    description = business.description if business else ""
    values = "".join(
        f"""
              <li class="flex items-center gap-2">
                <svg class="w-5 h-5 text-primary flex-shrink-0" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2">{_STAR_ICON}</svg>
                <span>{escape(value)}</span>
              </li>"""
        for value in (business.core_value_lines() if business else [])
    )
    hero = _attr(preview.images.hero if preview.images else "")
    return f"""    <section id="about">
      <div class="container">
        <div class="about-grid">
          <div class="about-content">
            <h2>About Us</h2>
            <p class="mb-8">{escape(description)}</p>
            <h3>Our Values</h3>
            <ul class="space-y-4">{values}
            </ul>
          </div>
          <div class="about-image">
            <img src="{hero}" alt="About Us" />
          </div>
        </div>
      </div>
    </section>"""


def render_scripts() -> str:
    return f"    <script>{SCRIPT}    </script>"


def render_landing_page(preview: PagePreview, request: Optional[GenerationRequest] = None) -> str:
    """Render a complete standalone HTML document for one location page.

    When ``request`` is given the JSON-LD block also advertises the served
    radius around the page's city.
    """
    body = "\n\n".join(
        [
            render_nav(preview),
            render_hero(preview),
            render_services(preview.business),
            render_features(preview.images),
            render_about(preview),
            render_schema(preview, request),
            render_scripts(),
        ]
    )
    return f"""<!DOCTYPE html>
<html lang="en">
{render_head(preview)}
<body>
{body}
</body>
</html>
"""


def generate_manifest(previews: Iterable[PagePreview]) -> str:
    """JSON manifest listing url, title and location for a batch of pages."""
    manifest = [
        {
            "url": preview.url,
            "title": preview.title,
            "location": {
                "city": preview.location.city,
                "state": preview.location.state,
                "distance": preview.location.distance,
                "coordinates": {
                    "latitude": preview.location.latitude,
                    "longitude": preview.location.longitude,
                },
            },
        }
        for preview in previews
    ]
    return json.dumps(manifest, indent=2)
