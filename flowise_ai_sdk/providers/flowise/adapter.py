"""
Flowise chat model.

Builds prediction requests (upload negotiation included) and exposes
non-streaming and streaming generation. To keep a multi-turn session,
pass ``chat_id``; when omitted, one is generated only if a full-file
upload needs it.
"""

from typing import Any, Dict, List, Optional

from ...client.flowise_client import FlowiseClient
from ...config.constants import MODEL_ID, PROVIDER_NAME
from ...converters.prompt import convert_to_flowise_message
from ...core.normalization.usage import estimate_tokens, estimate_usage
from ...models.conversation_types import Prompt
from ...models.generation import (
    CallWarning,
    GenerateResult,
    PredictionRequest,
    PreparedRequest,
    StreamResult,
)
from ...models.uploads import ClassifiedUpload, UploadMode
from ...observability.logging import Logger
from ...streaming.translator import StreamTranslator
from ...uploads.classifier import UploadClassifier
from ...uploads.config_resolver import UploadConfigResolver
from ...uploads.extractor import AttachmentExtractor
from ..base import ProviderError
from ..errors import API_ERROR_PREFIX, STREAMING_ERROR_PREFIX, ErrorMapper


class FlowiseChatModel:
    """Chat model backed by a single Flowise chatflow."""

    provider = PROVIDER_NAME
    model_id = MODEL_ID
    supported_url_schemes = ("http", "https")

    def __init__(self, chatflow_id: str, client: FlowiseClient, logger: Optional[Logger] = None):
        self.chatflow_id = chatflow_id
        self.client = client
        self.logger = logger or client.logger
        self.config_resolver = UploadConfigResolver(client.fetch_with_auth, self.logger)
        self.classifier = UploadClassifier(client.fetch_remote_file, self.logger)
        self.extractor = AttachmentExtractor(client.fetch_with_auth, self.logger)

    def supports_url(self, url: str) -> bool:
        return url.split(":", 1)[0].lower() in self.supported_url_schemes

    async def prepare_request(
        self,
        prompt: Prompt,
        chat_id: Optional[str] = None,
        override_config: Optional[Dict[str, Any]] = None,
    ) -> PreparedRequest:
        """
        Build the prediction request for ``prompt``.

        Resolves the chatflow's upload config, classifies and encodes the
        attachments, then replaces the data of every ``file:full`` upload
        with its extracted text, one upload at a time.

        Returns:
            PreparedRequest with extraction warnings first, then constraint warnings

        Raises:
            AttachmentError: If an attachment cannot be normalized
        """
        config = await self.config_resolver.resolve(self.chatflow_id)
        result = await self.classifier.classify(prompt, config, chat_id=chat_id)
        uploads = result.uploads
        warnings: List[CallWarning] = []

        self.logger.debug("Uploads before attachment API", uploads=[u.summary() for u in uploads])
        if result.chat_id:
            for upload in uploads:
                if upload.type == UploadMode.FULL:
                    if not await self._extract(upload, result.chat_id):
                        warnings.append(CallWarning(message=f"Failed to extract content for file: {upload.name}"))
        if uploads:
            self.logger.debug("Uploads after attachment API", uploads=[u.summary() for u in uploads])

        warnings.extend(CallWarning(message=message) for message in result.warnings)
        request = PredictionRequest(
            question=convert_to_flowise_message(prompt),
            chat_id=result.chat_id,
            override_config=override_config,
            uploads=uploads or None,
        )
        return PreparedRequest(request=request, warnings=warnings)

    async def _extract(self, upload: ClassifiedUpload, chat_id: str) -> bool:
        extracted = await self.extractor.extract(upload, self.chatflow_id, chat_id)
        if extracted is None:
            return False
        upload.data = extracted
        return True

    async def generate(
        self,
        prompt: Prompt,
        chat_id: Optional[str] = None,
        override_config: Optional[Dict[str, Any]] = None,
    ) -> GenerateResult:
        """
        Run a non-streaming prediction.

        Raises:
            ProviderError: On transport failure, prefixed ``Flowise API error:``
        """
        prepared = await self.prepare_request(prompt, chat_id, override_config)
        request, warnings = prepared.request, prepared.warnings
        try:
            response = await self.client.predict(self.chatflow_id, request)
        except ProviderError:
            raise
        except Exception as e:
            raise ErrorMapper.map_flowise_error(e, API_ERROR_PREFIX) from e

        text = response.text
        if not text:
            text = ""
            warnings.append(CallWarning(message="No response from Flowise"))

        return GenerateResult(
            text=text,
            finish_reason="stop",
            usage=estimate_usage(request.question, estimate_tokens(text)),
            warnings=warnings,
            chat_id=response.chat_id or request.chat_id,
            response=response,
        )

    async def stream(
        self,
        prompt: Prompt,
        chat_id: Optional[str] = None,
        override_config: Optional[Dict[str, Any]] = None,
    ) -> StreamResult:
        """
        Start a streaming prediction.

        Returns:
            StreamResult whose ``stream`` yields protocol parts

        Raises:
            ProviderError: On transport failure, prefixed ``Flowise streaming error:``
        """
        prepared = await self.prepare_request(prompt, chat_id, override_config)
        request = prepared.request.model_copy(update={"streaming": True})
        try:
            events = await self.client.predict_stream(self.chatflow_id, request)
        except ProviderError:
            raise
        except Exception as e:
            raise ErrorMapper.map_flowise_error(e, STREAMING_ERROR_PREFIX) from e

        translator = StreamTranslator(request.question, logger=self.logger)
        return StreamResult(
            stream=translator.translate(events),
            request=request,
            warnings=prepared.warnings,
        )

