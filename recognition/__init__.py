# recognition/__init__.py

"""
Núcleo del relay de reconocimiento de audio.

Flujo por request:

    stage_upload -> AuddClient.recognize -> discard_upload
                 -> decode_provider_body -> normalize_match

Uso típico:

    from recognition.config import RelaySettings
    from recognition.provider import AuddClient

    client = AuddClient(RelaySettings.from_env())
"""
