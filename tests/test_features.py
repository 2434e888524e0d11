"""Tests for the feature toggle system."""

import pytest
from django.http import Http404, HttpRequest, HttpResponse
from django.test import override_settings
from django.views import View

from django_confdesk.features import FeatureRequiredMixin, is_feature_enabled, require_feature
from django_confdesk.settings import get_config

ALL_FEATURES = (
    "tickets",
    "sponsors",
    "proposals",
    "sales_update",
    "manage_ui",
)


class TestFeaturesConfigDefaults:
    """All features are enabled by default."""

    def test_all_features_enabled_by_default(self) -> None:
        config = get_config().features
        for feature in ALL_FEATURES:
            assert getattr(config, f"{feature}_enabled") is True

    def test_features_config_is_frozen(self) -> None:
        config = get_config().features
        with pytest.raises(AttributeError):
            config.tickets_enabled = False  # type: ignore[misc]


class TestIsFeatureEnabled:
    @pytest.mark.parametrize("feature", ALL_FEATURES)
    def test_returns_true_by_default(self, feature: str) -> None:
        assert is_feature_enabled(feature) is True

    @pytest.mark.parametrize("feature", ALL_FEATURES)
    def test_returns_false_when_disabled(self, feature: str) -> None:
        with override_settings(DJANGO_CONFDESK={"features": {f"{feature}_enabled": False}}):
            assert is_feature_enabled(feature) is False

    def test_unknown_feature_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown feature"):
            is_feature_enabled("nonexistent_module")

    def test_disabling_one_feature_leaves_others_enabled(self) -> None:
        with override_settings(DJANGO_CONFDESK={"features": {"sponsors_enabled": False}}):
            assert is_feature_enabled("sponsors") is False
            assert is_feature_enabled("tickets") is True


class TestRequireFeature:
    def test_passes_when_enabled(self) -> None:
        require_feature("tickets")

    def test_raises_404_when_disabled(self) -> None:
        with override_settings(DJANGO_CONFDESK={"features": {"tickets_enabled": False}}):
            with pytest.raises(Http404):
                require_feature("tickets")


class _SingleFeatureView(FeatureRequiredMixin, View):
    required_feature = "proposals"

    def get(self, request: HttpRequest) -> HttpResponse:
        return HttpResponse("ok")


class _MultiFeatureView(FeatureRequiredMixin, View):
    required_feature = ("tickets", "manage_ui")

    def get(self, request: HttpRequest) -> HttpResponse:
        return HttpResponse("ok")


def _get(view_class: type[View]) -> HttpResponse:
    request = HttpRequest()
    request.method = "GET"
    return view_class.as_view()(request)


class TestFeatureRequiredMixin:
    def test_dispatches_when_enabled(self) -> None:
        assert _get(_SingleFeatureView).status_code == 200

    def test_404_when_single_feature_disabled(self) -> None:
        with override_settings(DJANGO_CONFDESK={"features": {"proposals_enabled": False}}):
            with pytest.raises(Http404):
                _get(_SingleFeatureView)

    def test_404_when_any_of_multiple_features_disabled(self) -> None:
        with override_settings(DJANGO_CONFDESK={"features": {"manage_ui_enabled": False}}):
            with pytest.raises(Http404):
                _get(_MultiFeatureView)

    def test_empty_required_feature_always_dispatches(self) -> None:
        class OpenView(FeatureRequiredMixin, View):
            def get(self, request: HttpRequest) -> HttpResponse:
                return HttpResponse("ok")

        assert _get(OpenView).status_code == 200
