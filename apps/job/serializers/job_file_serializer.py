from rest_framework import serializers

from apps.job.enums import JobFileKind
from apps.job.models import JobFile


class JobFileSerializer(serializers.ModelSerializer):
    mimeType = serializers.CharField(source="mime_type", read_only=True)
    uploadedAt = serializers.DateTimeField(source="uploaded_at", read_only=True)
    uploadedBy = serializers.CharField(source="uploaded_by", read_only=True)
    isVendorProof = serializers.SerializerMethodField()

    class Meta:
        model = JobFile
        fields = [
            "id",
            "filename",
            "kind",
            "size",
            "mimeType",
            "checksum",
            "uploadedAt",
            "uploadedBy",
            "isVendorProof",
        ]
        read_only_fields = fields

    def get_isVendorProof(self, obj: JobFile) -> bool:
        return obj.kind == JobFileKind.VENDOR_PROOF
