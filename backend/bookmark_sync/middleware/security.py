"""
Security headers
"""

SECURITY_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'DENY',
    'X-XSS-Protection': '1; mode=block',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
    'Permissions-Policy': 'camera=(), microphone=(), geolocation=()',
}


def add_security_headers(response):
    """after_request hook: set the standard security headers"""
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response
