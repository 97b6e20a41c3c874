"""
Script generation prompts.

Used by: script_generation/generator.py, scheduler/trigger.py
"""

from dataclasses import dataclass

from autoshorts.config.constants import AD_KEY_FACTS, SCENES_PER_VIDEO, SCENES_PER_VIDEO_WITH_AD


@dataclass
class PromptTemplate:
    """
    A prompt template with ``{placeholder}`` fields.

    Usage:
        VIRAL_BLOCK.format(hook="...", cta="...")
    """
    template: str
    description: str = ""

    def format(self, **kwargs) -> str:
        result = self.template
        for key, value in kwargs.items():
            result = result.replace("{" + key + "}", str(value))
        return result

    def __str__(self) -> str:
        return f"PromptTemplate({self.description})"


SYSTEM_INSTRUCTION_SCRIPT = """
Tu es un expert en création de contenu viral pour TikTok/Reels en France.
Ta mission est de créer une vidéo courte optimisée pour la RÉTENTION (Watchtime) et l'ENGAGEMENT (Commentaires).

RÈGLES DE STRUCTURE GÉNÉRALE :
1. **SCÈNE 1 (LE HOOK - 0 à 3s) :** Agressif, visuel, immédiat.
2. **CORPS :** Valeur, Histoire ou Dilemme.
3. **FIN :** Call-to-Action clair.

SPECIFICITÉS SELON LE TYPE :

1. **SCHOOL_TIPS / MOTIVATION :**
   - Ton : Mentor, Coach.
   - Visuel : Dynamique, studieux, réussite.

2. **SCARY_STORY (Horreur) :**
   - Ton : Lent, grave, mystérieux.
   - Structure : Fait réel effrayant ou légende urbaine courte.
   - Visuels : Sombres, ombres, atmosphère "liminal spaces", inquiétant.

3. **WOULD_YOU_RATHER (Tu préfères) :**
   - Ton : Provocateur, rapide.
   - Structure :
     - S1 : "Tu préfères..."
     - S2 : Option A (Situation extrême/drôle).
     - S3 : Option B (Situation encore pire/meilleure).
     - S4 : "Dis-moi ton choix en commentaire !"
   - Visuels : Split screen conceptuel, couleurs opposées (Rouge vs Bleu).

4. **SHOWER_THOUGHTS (Pensées de douche) :**
   - Ton : "Mind blown", philosophique, lent.
   - Structure : "Réalisation soudaine" sur la vie quotidienne.
   - Visuels : Abstraits, satisfaisants, boucles visuelles, eau, espace.

Format de Sortie (JSON uniquement) :
- "trending_topic": Titre Clickbait.
- "character_description": Description visuelle.
- "full_script": Le script complet.
- "scenes": Tableau d'objets :
   - "visual_prompt": Description pour Veo. Cinématique, haute qualité.
   - "narration": Texte lu.
""".strip()


SCRIPT_REQUEST = PromptTemplate(
    template='Trouve une tendance virale pour la catégorie : "{category_label}" ({category}). Génère la vidéo.',
    description="Base request for one video",
)

VIRAL_BLOCK = PromptTemplate(
    template="""[MODE VIRAL ACTIVÉ] :
1. FORCE ce Hook précis pour la Scène 1 (c'est impératif) : "{hook}"
2. FORCE ce Call-To-Action précis pour la dernière scène : "{cta}"
3. Le ton doit être CHOC, RAPIDE et PROVOCANT. Pas de phrases molles.""",
    description="Forces a hook and a call to action",
)

CALM_TONE_BLOCK = "Ton : Naturel, Engageant mais bienveillant."

AD_BLOCK = PromptTemplate(
    template="""IMPORTANT: Tu DOIS générer {scene_count} SCÈNES au total. La scène 3 DOIT être cette publicité (ne change pas les infos clés : {key_facts}) :
{ad_script}""",
    description="Sponsor scene in third position",
)

PLAIN_STRUCTURE_BLOCK = PromptTemplate(
    template="Génère exactement {scene_count} scènes pour une structure virale rapide.",
    description="Scene count without sponsor",
)


def build_script_prompt(
    category: str,
    category_label: str,
    ad_script: str | None = None,
    hook: str | None = None,
    cta: str | None = None,
) -> str:
    """Assemble the user prompt; ``ad_script`` switches to the five-scene sponsored layout."""
    blocks = [SCRIPT_REQUEST.format(category=category, category_label=category_label)]

    if hook is not None and cta is not None:
        blocks.append(VIRAL_BLOCK.format(hook=hook, cta=cta))
    else:
        blocks.append(CALM_TONE_BLOCK)

    if ad_script:
        blocks.append(AD_BLOCK.format(
            scene_count=SCENES_PER_VIDEO_WITH_AD,
            key_facts=", ".join(AD_KEY_FACTS),
            ad_script=ad_script.strip(),
        ))
    else:
        blocks.append(PLAIN_STRUCTURE_BLOCK.format(scene_count=SCENES_PER_VIDEO))

    return "\n\n".join(blocks)
