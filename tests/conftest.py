"""Shared fixtures."""

import pytest

from wpspawn.models.site import Site, SiteMetadata, SiteSpec


IMAGE = "docker.io/bitpoke/wordpress-runtime:6.4"


@pytest.fixture
def make_site():
    """Factory building a site named sites/blog from spec keyword arguments."""

    def _make_site(name="blog", namespace="sites", labels=None, **spec):
        spec.setdefault("image", IMAGE)
        return Site(
            metadata=SiteMetadata(name=name, namespace=namespace, labels=labels or {}),
            spec=SiteSpec(**spec),
        )

    return _make_site


@pytest.fixture
def site(make_site):
    """Site with a single route and nothing else."""
    return make_site(routes=[{"domain": "example.com", "path": "/"}])
