"""Cliente minimo para a API Gemini.

Envia um prompt de texto junto com o documento anexado inline e devolve o
texto bruto da resposta. A chave de API e fornecida por requisicao e nunca
e registrada em log.
"""

import logging
import threading
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

logger = logging.getLogger(__name__)

# genai.configure() sets a process-wide key and the model builds its client lazily on the
# first call, so the lock spans the call: one Gemini request at a time per process.
_SDK_LOCK = threading.Lock()


def is_model_not_found(error: BaseException) -> bool:
    """Resumo:
        Indica se a falha significa que o modelo nao existe ou nao esta habilitado.

    Args:
        error (BaseException): Excecao levantada pela chamada ao provedor.

    Returns:
        bool: True para 404/NotFound ou mensagens contendo "not found".
    """
    if isinstance(error, google_exceptions.NotFound):
        return True
    message = str(error)
    return "404" in message or "not found" in message.lower()


class GeminiClient:
    """Encapsula uma chave de API e as chamadas `generate_content` do SDK."""

    def __init__(self, api_key: str, generation_config: Optional[dict] = None):
        self.api_key = api_key
        self.generation_config = generation_config

    def generate(
        self,
        model_name: str,
        prompt: str,
        document: Optional[bytes] = None,
        mime_type: Optional[str] = None,
    ) -> str:
        """Resumo:
            Executa uma unica chamada ao modelo e retorna o texto gerado.

        Args:
            model_name (str): Identificador do modelo Gemini.
            prompt (str): Instrucao em texto.
            document (Optional[bytes]): Conteudo do arquivo anexado inline.
            mime_type (Optional[str]): Tipo MIME do documento anexado.

        Returns:
            str: Texto da resposta do modelo.

        Raises:
            google.api_core.exceptions.GoogleAPIError: Falhas de transporte ou da API.
            ValueError: Quando a resposta nao traz texto (ex.: bloqueada).
        """
        contents = [prompt]
        if document is not None:
            contents.append({"mime_type": mime_type, "data": document})

        with _SDK_LOCK:
            genai.configure(api_key=self.api_key)
            model = genai.GenerativeModel(model_name, generation_config=self.generation_config)
            logger.debug("Calling %s with %d content part(s)", model_name, len(contents))
            response = model.generate_content(contents)

        return response.text
