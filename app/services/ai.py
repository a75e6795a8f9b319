"""
Tweet and thread generation for sharing a blog, backed by the OpenAI chat API.
"""
import json
import logging
from typing import List

from openai import OpenAI, OpenAIError

from app.core.exceptions import TransientInfraError
from app.schemas.blog import BlogDetail

logger = logging.getLogger(__name__)

TWEET_PROMPT = """You are a social media strategist writing one tweet that summarizes a blog post.
Open with a hook (a surprising fact, a question or a bold statement), summarize the main idea in
one or two sentences without giving everything away, add a few emojis and relevant hashtags,
mention the author {author}, and end with a call to action pointing to {link}.
The whole tweet, link included, must fit in 280 characters.

Blog content:
{content}"""

THREAD_PROMPT = """You are a social media strategist writing a Twitter thread that summarizes a blog post.
Start with a strong hook, break the main idea into 8-10 concise tweets, use emojis and hashtags
where they help, and finish with a call to action pointing to {link}. Credit the author {author}
in the last tweet. Number tweets as 1, 2, 3 rather than 1/x. Each tweet must fit in 280 characters.
Reply with a JSON object of the form {{"tweets": ["first tweet", "second tweet"]}}.

Blog content:
{content}"""


class SocialSummaryGenerator:
    def __init__(self, api_key: str, model: str, thread_model: str, client: OpenAI = None):
        self.client = client or OpenAI(api_key=api_key)
        self.model = model
        self.thread_model = thread_model

    def _complete(self, model: str, prompt: str, **kwargs) -> str:
        try:
            response = self.client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                **kwargs,
            )
        except OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise TransientInfraError("text generation failed") from e
        return (response.choices[0].message.content or "").strip()

    def generate_tweet(self, blog: BlogDetail, link: str) -> str:
        prompt = TWEET_PROMPT.format(author=blog.author.name, link=link, content=blog.content)
        return self._complete(self.model, prompt)

    def generate_thread(self, blog: BlogDetail, link: str) -> List[str]:
        prompt = THREAD_PROMPT.format(author=blog.author.name, link=link, content=blog.content)
        raw = self._complete(self.thread_model, prompt, response_format={"type": "json_object"})
        try:
            tweets = json.loads(raw)["tweets"]
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.error(f"Unusable thread response: {raw[:200]}")
            raise TransientInfraError("text generation returned malformed output") from e
        if not isinstance(tweets, list) or not all(isinstance(t, str) for t in tweets):
            raise TransientInfraError("text generation returned malformed output")
        return tweets
