"""Tests for site models."""

import pytest
from pydantic import ValidationError

from wpspawn.models.site import Site, join_path


class TestJoinPath:
    """Test slash separated path joining."""

    def test_join(self):
        """Test common joins."""
        assert join_path("example.com", "/") == "example.com"
        assert join_path("example.com", "/blog") == "example.com/blog"
        assert join_path("example.com", "blog/") == "example.com/blog"
        assert join_path("bucket", "prefix") == "bucket/prefix"
        assert join_path("bucket", "") == "bucket"
        assert join_path("/", "wp") == "/wp"
        assert join_path("") == ""


class TestSite:
    """Test Site model and derived values."""

    def test_minimal_site(self, make_site):
        """Test defaults of a minimal site."""
        site = make_site()

        assert site.name == "blog"
        assert site.namespace == "sites"
        assert site.spec.wordpress_path_prefix == "/wp"
        assert site.spec.routes == []
        assert site.spec.code is None
        assert site.main_domain == "blog.sites.svc"
        assert site.main_path == "/"

    def test_urls(self, make_site):
        """Test home and site URLs."""
        site = make_site(routes=[{"domain": "example.com", "path": "/blog"}])

        assert site.home_url() == "http://example.com/blog"
        assert site.site_url() == "http://example.com/blog/wp"
        assert site.home_url("wp-admin") == "http://example.com/blog/wp-admin"

    def test_main_domain_prefers_routes(self, make_site):
        """Test main domain precedence."""
        site = make_site(domain="fallback.example.com", routes=[{"domain": "example.com"}])

        assert site.main_domain == "example.com"
        assert site.routes() == ["example.com"]

    def test_component_name(self, make_site):
        """Test generated object names."""
        assert make_site().component_name("wp") == "blog-wp"

    def test_code_defaults(self, make_site):
        """Test code volume path defaults."""
        code = make_site(code={"emptyDir": {}}).spec.code

        assert code.read_only is False
        assert code.mount_path == "/app/web/wp-content"
        assert code.content_sub_path == "wp-content/"
        assert code.config_sub_path == "config/"

    def test_media_defaults(self, make_site):
        """Test media volume path defaults."""
        media = make_site(media={"s3": {"bucket": "b"}}).spec.media

        assert media.mount_path == "/app/web/wp-content/uploads"
        assert media.content_sub_path == ""
        assert media.s3.path_prefix == ""

    def test_from_resource_dict(self):
        """Test validation from camelCase resource data."""
        site = Site.model_validate({
            "metadata": {"name": "shop", "namespace": "prod"},
            "spec": {
                "image": "wordpress:6",
                "imagePullPolicy": "Always",
                "wordpressPathPrefix": "/core",
                "code": {"git": {"repository": "https://example/repo.git", "reference": "v1"}},
            },
        })

        assert site.spec.image_pull_policy == "Always"
        assert site.spec.code.git.reference == "v1"
        assert site.site_url() == "http://shop.prod.svc/core"

    def test_image_required(self):
        """Test that the image is required."""
        with pytest.raises(ValidationError) as exc_info:
            Site.model_validate({"metadata": {"name": "shop"}, "spec": {}})

        assert "image" in str(exc_info.value)

    def test_immutable(self, make_site):
        """Test that sites are frozen."""
        site = make_site()

        with pytest.raises(ValidationError):
            site.spec.image = "other"

    def test_code_path_overrides(self, make_site):
        """Test the fetch destination and config path fields."""
        code = make_site(code={"emptyDir": {}}).spec.code

        assert code.src_mount_path == "/var/run/presslabs.org/code/src"
        assert code.config_mount_path == "/app/config"

        code = make_site(code={"emptyDir": {}, "srcMountPath": "/src", "configMountPath": "/cfg"}).spec.code

        assert code.src_mount_path == "/src"
        assert code.config_mount_path == "/cfg"

    def test_unknown_intent_fields_rejected(self):
        """Test that misspelled site keys fail validation."""
        with pytest.raises(ValidationError) as exc_info:
            Site.model_validate({
                "metadata": {"name": "shop"},
                "spec": {"image": "wordpress:6", "code": {"persistentVolumeclaim": {}}},
            })

        assert "persistentVolumeclaim" in str(exc_info.value)

        with pytest.raises(ValidationError):
            Site.model_validate({"metadata": {"name": "shop"}, "spec": {"image": "wordpress:6", "rutes": []}})

    def test_metadata_allows_extra_fields(self):
        """Test that resource metadata may carry server side fields."""
        site = Site.model_validate({
            "metadata": {"name": "shop", "uid": "1234", "resourceVersion": "7"},
            "spec": {"image": "wordpress:6"},
        })

        assert site.name == "shop"
