from django.urls import path

from .views import DiagnosisView, DescribeView

urlpatterns = [
    path('diagnosis', DiagnosisView.as_view(), name='assistant-diagnosis'),
    path('describe', DescribeView.as_view(), name='assistant-describe'),
]
