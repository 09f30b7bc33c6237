from rest_framework import views, serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from . import services


class ImageSerializer(serializers.Serializer):
    image = serializers.CharField(
        trim_whitespace=True,
        error_messages={
            'required': 'Image data is required.',
            'blank': 'Image data is required.',
            'null': 'Image data is required.',
            'invalid': 'Image data is required.',
        },
    )

    def validate_image(self, value):
        # CharField would happily coerce numbers to strings
        if not isinstance(self.initial_data.get('image'), str):
            raise serializers.ValidationError('Image data is required.')
        return value


class DiagnosisView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ImageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        predictions = services.diagnose(serializer.validated_data['image'])
        return Response({"predictions": predictions})


class DescribeView(views.APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = ImageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(services.describe(serializer.validated_data['image']))
