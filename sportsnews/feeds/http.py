import requests
from requests.adapters import HTTPAdapter

# ---------- HTTP session global com pool (sem retry: falha pula a estratégia até o próximo refresh) ----------
SESSION = requests.Session()
_ADAPTER = HTTPAdapter(pool_connections=10, pool_maxsize=20, max_retries=0)
SESSION.mount("https://", _ADAPTER)
SESSION.mount("http://", _ADAPTER)
SESSION.headers.update({"User-Agent": "SportsNews/1.0 (+https://localhost)"})
