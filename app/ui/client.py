"""Chamadas HTTP da interface Streamlit para a API.

As funcoes nunca levantam excecao: falhas de rede, respostas de erro e corpos
invalidos viram uma mensagem exibida inline na pagina.
"""

import re
from typing import Optional, Tuple

import requests

TIMEOUT_EXTRACT = 300
TIMEOUT_EXPORT = 60
DEFAULT_EXPORT_FILENAME = "Financial_Data_Report.xlsx"


def error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP error {response.status_code}"


def extract_document(
    base_url: str,
    filename: str,
    content: bytes,
    mime_type: Optional[str],
    api_key: str,
) -> Tuple[Optional[dict], Optional[str]]:
    """Resumo:
        Envia o documento para extracao.

    Args:
        base_url (str): URL base da API (ex.: http://localhost:8000/v1).
        filename (str): Nome do arquivo.
        content (bytes): Conteudo do arquivo.
        mime_type (Optional[str]): Tipo MIME informado pelo upload.
        api_key (str): Chave Gemini da sessao.

    Returns:
        Tuple[Optional[dict], Optional[str]]: (dados, None) em caso de sucesso ou (None, erro).
    """
    try:
        response = requests.post(
            f"{base_url}/process-document",
            files={"file": (filename, content, mime_type)},
            data={"apiKey": api_key},
            timeout=TIMEOUT_EXTRACT,
        )
    except requests.Timeout:
        return None, "API request timed out."
    except requests.ConnectionError:
        return None, "Could not connect to the API."
    except requests.RequestException as e:
        return None, f"Request failed: {e}"

    if not response.ok:
        return None, error_message(response)

    try:
        data = response.json()
    except ValueError:
        return None, "The API returned an invalid response."
    if not isinstance(data, dict):
        return None, "The API returned an invalid response."
    return data, None


def export_workbook(base_url: str, result: dict) -> Tuple[Optional[Tuple[str, bytes]], Optional[str]]:
    """Resumo:
        Solicita a planilha Excel para os dados extraidos.

    Args:
        base_url (str): URL base da API.
        result (dict): Dados retornados pela extracao.

    Returns:
        Tuple[Optional[Tuple[str, bytes]], Optional[str]]: ((nome, conteudo), None) ou (None, erro).
    """
    try:
        response = requests.post(
            f"{base_url}/download-excel",
            json=result,
            timeout=TIMEOUT_EXPORT,
        )
    except requests.Timeout:
        return None, "Export request timed out."
    except requests.ConnectionError:
        return None, "Could not connect to the API."
    except requests.RequestException as e:
        return None, f"Request failed: {e}"

    if not response.ok:
        return None, error_message(response)

    match = re.search(r'filename="([^"]+)"', response.headers.get("Content-Disposition", ""))
    filename = match.group(1) if match else DEFAULT_EXPORT_FILENAME
    return (filename, response.content), None
