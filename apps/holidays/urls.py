"""URL routing for holidays."""

from django.urls import path  # type: ignore

from .views import PublicHolidaysView, SchoolHolidaysView

urlpatterns = [
    path('public/', PublicHolidaysView.as_view(), name='holidays-public'),
    path('school/', SchoolHolidaysView.as_view(), name='holidays-school'),
]
