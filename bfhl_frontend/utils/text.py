def replace_lone_surrogates(text: str) -> str:
    """Swap unpaired UTF-16 surrogates for U+FFFD so the text can be encoded as UTF-8."""
    return text.encode("utf-16", errors="surrogatepass").decode("utf-16", errors="replace")
