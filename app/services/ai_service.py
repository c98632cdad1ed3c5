import json
import logging
from typing import Dict, Any, List

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

INSIGHT_TYPES = {"pattern", "recommendation", "achievement"}

FALLBACK_INSIGHTS = [
    {
        "type": "pattern",
        "title": "Keep Up the Great Work!",
        "content": "You're making progress on your fitness journey. Consistency is key to achieving your goals.",
        "data": {},
    },
    {
        "type": "recommendation",
        "title": "Stay Hydrated",
        "content": "Remember to drink plenty of water throughout the day, especially before and after workouts.",
        "data": {},
    },
]

SYSTEM_PROMPT = (
    "You are a professional fitness and nutrition coach providing personalized insights "
    "based on user data. Be encouraging, specific, and provide actionable recommendations."
)


class AIServiceError(Exception):
    """Ошибка обращения к AI провайдеру"""


class AIService:
    def __init__(self, api_key: str = None, base_url: str = None, model: str = None):
        self.api_key = settings.GROQ_API_KEY if api_key is None else api_key
        self.base_url = base_url or settings.AI_BASE_URL
        self.model = model or settings.AI_MODEL

        logger.info("Groq AI Service initialized. API Key: %s", "PRESENT" if self.api_key else "NOT FOUND")

    async def _make_groq_request(self, prompt: str, max_tokens: int = 1000) -> str:
        if not self.api_key:
            raise AIServiceError("AI сервис не настроен. Добавьте GROQ_API_KEY в .env файл")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.base_url,
                    headers={
                        "Content-Type": "application/json",
                        "Authorization": f"Bearer {self.api_key}"
                    },
                    json={
                        "model": self.model,
                        "messages": [
                            {"role": "system", "content": SYSTEM_PROMPT},
                            {"role": "user", "content": prompt},
                        ],
                        "response_format": {"type": "json_object"},
                        "temperature": 0.7,
                        "max_tokens": max_tokens,
                        "stream": False
                    },
                    timeout=30.0
                )
        except httpx.TimeoutException as e:
            raise AIServiceError("Таймаут подключения к Groq API") from e
        except httpx.HTTPError as e:
            raise AIServiceError(f"Ошибка подключения к Groq API: {e}") from e

        logger.debug("Groq API response status: %s", response.status_code)
        if response.status_code != 200:
            raise AIServiceError(f"Ошибка Groq API: {response.status_code} - {response.text}")

        result = response.json()
        try:
            return result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise AIServiceError("Неверный формат ответа от Groq API") from e

    @staticmethod
    def build_insights_prompt(
            workouts: List[Dict[str, Any]],
            meals: List[Dict[str, Any]],
            workout_stats: Dict[str, Any],
            meal_stats: Dict[str, Any],
    ) -> str:
        """Собрать промпт из последних тренировок, приемов пищи и агрегатов"""
        recent_workouts = [
            {
                "type": w.get("type"),
                "duration": w.get("duration"),
                "date": w.get("date"),
                "calories": w.get("calories_burned"),
            }
            for w in workouts[:10]
        ]
        recent_meals = [
            {
                "type": m.get("type"),
                "calories": m.get("calories"),
                "date": m.get("date"),
                "food_items": m.get("food_items"),
            }
            for m in meals[:10]
        ]

        return f"""
        Analyze the following fitness and nutrition data and provide personalized insights and recommendations.

        Workout Data:
        - Total workouts: {workout_stats.get("total_workouts", 0)}
        - Total minutes exercised: {workout_stats.get("total_minutes", 0)}
        - Total calories burned: {workout_stats.get("total_calories", 0)}
        - Average workout duration: {workout_stats.get("avg_duration", 0)} minutes
        - Recent workouts: {json.dumps(recent_workouts, default=str)}

        Meal Data:
        - Total meals logged: {meal_stats.get("total_meals", 0)}
        - Total calories consumed: {meal_stats.get("total_calories", 0)}
        - Average calories per meal: {meal_stats.get("avg_calories", 0)}
        - Nutrition breakdown: {json.dumps(meal_stats.get("nutrition_breakdown", {}))}
        - Recent meals: {json.dumps(recent_meals, default=str)}

        Provide 3-4 personalized insights as JSON with the structure:
        {{"insights": [{{"type": "pattern|recommendation|achievement", "title": "...", "content": "...", "data": {{}}}}]}}
        """

    @staticmethod
    def parse_insights(raw: str) -> List[Dict[str, Any]]:
        """Разобрать ответ модели; невалидные элементы отбрасываются"""
        payload = json.loads(raw)
        items = payload.get("insights", []) if isinstance(payload, dict) else []

        insights = []
        for item in items:
            if not isinstance(item, dict) or not item.get("title") or not item.get("content"):
                continue
            insight_type = item.get("type")
            insights.append({
                "type": insight_type if insight_type in INSIGHT_TYPES else "pattern",
                "title": str(item["title"]),
                "content": str(item["content"]),
                "data": item.get("data") if isinstance(item.get("data"), dict) else None,
            })
        return insights

    async def generate_insights(
            self,
            workouts: List[Dict[str, Any]],
            meals: List[Dict[str, Any]],
            workout_stats: Dict[str, Any],
            meal_stats: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """Сгенерировать инсайты; при любой ошибке возвращаются запасные"""
        prompt = self.build_insights_prompt(workouts, meals, workout_stats, meal_stats)

        try:
            raw = await self._make_groq_request(prompt)
            insights = self.parse_insights(raw)
        except (AIServiceError, ValueError) as e:
            logger.warning("Insight generation failed, using fallback: %s", e)
            return [dict(item) for item in FALLBACK_INSIGHTS]

        if not insights:
            logger.warning("AI returned no usable insights, using fallback")
            return [dict(item) for item in FALLBACK_INSIGHTS]

        return insights


ai_service = AIService()
