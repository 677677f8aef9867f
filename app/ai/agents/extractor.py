"""Agente de extracao de demonstracoes financeiras via Gemini.

Percorre a lista de modelos candidatos em ordem, envia o prompt de extracao
com o documento anexado e converte a primeira resposta obtida em
`FinancialData`. Nenhum estado e compartilhado entre chamadas.
"""

import logging
from typing import Callable, List, Optional

from pydantic import ValidationError

from app.ai.llm.gemini import GeminiClient, is_model_not_found
from app.ai.prompts.extractor.system_prompt import EXTRACTION_PROMPT
from app.core.config import settings
from app.schemas.domain import ExtractionResult, FinancialData
from app.utils.llm_output import strip_code_fences

logger = logging.getLogger(__name__)

MISSING_API_KEY_ERROR = "Gemini API Key is missing"
PARSE_ERROR = "Failed to parse API response as JSON"
NO_MODEL_ERROR = "Failed to connect to any Gemini model. Please check your API key and region."


class FinancialExtractor:
    """Executa a extracao com fallback sequencial entre modelos candidatos.

    Um modelo que responde encerra a busca, mesmo quando a resposta nao e um
    JSON valido. Apenas falhas de chamada avancam para o proximo candidato.
    """

    def __init__(
        self,
        client_factory: Callable[[str], GeminiClient] = GeminiClient,
        model_candidates: Optional[List[str]] = None,
        fallback_on_any_error: Optional[bool] = None,
        prompt: str = EXTRACTION_PROMPT,
        name: str = "extractor",
    ):
        """Resumo:
            Inicializa o extrator com a fabrica de clientes e a lista de modelos.

        Args:
            client_factory (Callable[[str], GeminiClient]): Cria um cliente a partir da chave de API.
            model_candidates (Optional[List[str]]): Modelos em ordem de preferencia.
            fallback_on_any_error (Optional[bool]): Se falhas que nao sao 404 tambem avancam.
            prompt (str): Instrucao enviada ao modelo.
            name (str): Nome do agente usado nos logs.

        Returns:
            None: Nao retorna valor.
        """
        self.client_factory = client_factory
        self.model_candidates = list(
            settings.GEMINI_MODELS if model_candidates is None else model_candidates
        )
        self.fallback_on_any_error = (
            settings.FALLBACK_ON_ANY_ERROR if fallback_on_any_error is None else fallback_on_any_error
        )
        self.prompt = prompt
        self.name = name

    def extract(self, api_key: str, file_content: bytes, mime_type: str) -> ExtractionResult:
        """Resumo:
            Extrai dados financeiros do documento usando o primeiro modelo disponivel.

        Args:
            api_key (str): Chave Gemini da requisicao atual.
            file_content (bytes): Conteudo binario do documento.
            mime_type (str): Tipo MIME do documento.

        Returns:
            ExtractionResult: `data` preenchido em caso de sucesso, ou `error` com a mensagem.
        """
        if not api_key:
            return ExtractionResult(data=None, error=MISSING_API_KEY_ERROR)

        client = self.client_factory(api_key)
        last_error: Optional[Exception] = None

        for model_name in self.model_candidates:
            logger.info("[%s] Attempting model %s", self.name, model_name)
            try:
                text = client.generate(model_name, self.prompt, file_content, mime_type)
            except Exception as e:
                last_error = e
                if is_model_not_found(e):
                    logger.warning("[%s] Model %s not found: %s", self.name, model_name, e)
                    continue
                if not self.fallback_on_any_error:
                    logger.error("[%s] Model %s failed, stopping: %s", self.name, model_name, e)
                    return ExtractionResult(data=None, error=str(e) or NO_MODEL_ERROR)
                logger.warning("[%s] Model %s failed, trying next: %s", self.name, model_name, e)
                continue

            return self._parse_response(model_name, text)

        logger.error("[%s] All Gemini models failed", self.name)
        message = str(last_error) if last_error is not None else ""
        return ExtractionResult(data=None, error=message or NO_MODEL_ERROR)

    def _parse_response(self, model_name: str, text: str) -> ExtractionResult:
        """Resumo:
            Remove cercas markdown e valida o JSON como `FinancialData`.

        Args:
            model_name (str): Modelo que produziu a resposta.
            text (str): Texto bruto retornado.

        Returns:
            ExtractionResult: Dados validados ou erro de parse.
        """
        clean_json = strip_code_fences(text)
        try:
            data = FinancialData.model_validate_json(clean_json)
        except ValidationError as e:
            logger.error("[%s] JSON parse error with model %s: %s", self.name, model_name, e)
            return ExtractionResult(data=None, error=PARSE_ERROR)

        logger.info(
            "[%s] Model %s extracted %d income statement line(s)",
            self.name, model_name, len(data.income_statement),
        )
        return ExtractionResult(data=data)
